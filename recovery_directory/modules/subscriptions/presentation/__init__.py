# 📄 File: recovery_directory/modules/subscriptions/presentation/__init__.py
