# 📄 File: recovery_directory/shared/__init__.py
