# 📄 File: recovery_directory/modules/subscriptions/domain/__init__.py
