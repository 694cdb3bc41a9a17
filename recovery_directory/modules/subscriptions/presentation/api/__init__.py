# 📄 File: recovery_directory/modules/subscriptions/presentation/api/__init__.py
