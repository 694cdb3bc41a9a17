# 📄 File: recovery_directory/modules/user_management/presentation/__init__.py
