# 📄 File: recovery_directory/modules/facility_directory/presentation/api/schemas/__init__.py
