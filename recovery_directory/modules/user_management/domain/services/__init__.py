# 📄 File: recovery_directory/modules/user_management/domain/services/__init__.py
