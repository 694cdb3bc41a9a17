# 📄 File: recovery_directory/shared/infrastructure/storage/__init__.py
