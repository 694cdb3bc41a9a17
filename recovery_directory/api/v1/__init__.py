# 📄 File: recovery_directory/api/v1/__init__.py
