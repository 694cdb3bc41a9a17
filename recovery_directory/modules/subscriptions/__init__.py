# 📄 File: recovery_directory/modules/subscriptions/__init__.py
