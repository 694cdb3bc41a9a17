# 📄 File: recovery_directory/modules/user_management/infrastructure/database/__init__.py
