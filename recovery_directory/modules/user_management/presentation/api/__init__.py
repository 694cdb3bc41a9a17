# 📄 File: recovery_directory/modules/user_management/presentation/api/__init__.py
