# 📄 File: recovery_directory/modules/subscriptions/domain/services/__init__.py
