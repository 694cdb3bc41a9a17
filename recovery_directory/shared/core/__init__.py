# 📄 File: recovery_directory/shared/core/__init__.py
