# 📄 File: recovery_directory/modules/user_management/presentation/api/v1/__init__.py
