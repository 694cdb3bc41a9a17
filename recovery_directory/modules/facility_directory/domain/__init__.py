# 📄 File: recovery_directory/modules/facility_directory/domain/__init__.py
