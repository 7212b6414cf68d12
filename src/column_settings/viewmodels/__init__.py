from .column_settings_viewmodel import ColumnRow, ColumnSettingsViewModel, pin_tooltip  # noqa: F401
