# 📄 File: recovery_directory/modules/subscriptions/domain/models/__init__.py
