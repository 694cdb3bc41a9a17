# 📄 File: recovery_directory/modules/user_management/infrastructure/__init__.py
