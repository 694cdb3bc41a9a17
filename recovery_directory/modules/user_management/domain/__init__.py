# 📄 File: recovery_directory/modules/user_management/domain/__init__.py
