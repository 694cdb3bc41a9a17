# 📄 File: recovery_directory/api/middleware/__init__.py
