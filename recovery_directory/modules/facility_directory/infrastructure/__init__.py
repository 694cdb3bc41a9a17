# 📄 File: recovery_directory/modules/facility_directory/infrastructure/__init__.py
