# 📄 File: recovery_directory/modules/facility_directory/presentation/__init__.py
