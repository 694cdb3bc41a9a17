# 📄 File: recovery_directory/shared/infrastructure/database/__init__.py
