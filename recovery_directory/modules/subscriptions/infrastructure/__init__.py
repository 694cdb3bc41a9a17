# 📄 File: recovery_directory/modules/subscriptions/infrastructure/__init__.py
