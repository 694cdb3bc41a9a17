# 📄 File: recovery_directory/modules/user_management/__init__.py
