# 📄 File: recovery_directory/modules/subscriptions/presentation/api/schemas/__init__.py
