# 📄 File: recovery_directory/shared/infrastructure/__init__.py
