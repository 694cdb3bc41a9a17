# 📄 File: recovery_directory/modules/user_management/domain/models/__init__.py
