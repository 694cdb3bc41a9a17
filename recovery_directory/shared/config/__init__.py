# 📄 File: recovery_directory/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Holds the settings that tell the directory how to reach its database,
# Supabase, and Stripe, and how it should behave in each environment.
#
# 🧪 Purpose (Technical Summary):
# Configuration package exports for settings management and the Supabase client factory.
#
# 🔗 Dependencies:
# - settings.py (application settings)
# - supabase.py (Supabase client factory)
#
# 🔄 Connected Modules / Calls From:
# - recovery_directory.main (application startup)
# - Infrastructure components

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
