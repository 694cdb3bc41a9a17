# 📄 File: recovery_directory/modules/user_management/presentation/api/schemas/__init__.py
