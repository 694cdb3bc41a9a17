# 📄 File: recovery_directory/modules/facility_directory/__init__.py
