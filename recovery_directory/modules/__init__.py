# 📄 File: recovery_directory/modules/__init__.py
