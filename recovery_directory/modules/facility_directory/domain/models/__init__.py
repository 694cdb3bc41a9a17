# 📄 File: recovery_directory/modules/facility_directory/domain/models/__init__.py
