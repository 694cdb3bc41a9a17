# 📄 File: recovery_directory/modules/user_management/domain/repositories/__init__.py
