# 📄 File: recovery_directory/modules/user_management/infrastructure/external/__init__.py
