# 📄 File: recovery_directory/shared/utils/__init__.py
