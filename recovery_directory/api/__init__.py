# 📄 File: recovery_directory/api/__init__.py
