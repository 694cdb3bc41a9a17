# 📄 File: recovery_directory/modules/facility_directory/infrastructure/database/__init__.py
