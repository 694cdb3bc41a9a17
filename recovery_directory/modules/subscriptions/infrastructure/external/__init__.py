# 📄 File: recovery_directory/modules/subscriptions/infrastructure/external/__init__.py
