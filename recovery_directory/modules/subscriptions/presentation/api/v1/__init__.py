# 📄 File: recovery_directory/modules/subscriptions/presentation/api/v1/__init__.py
