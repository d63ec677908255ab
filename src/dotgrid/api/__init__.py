from dotgrid.api.export import Export
from dotgrid.api.settings import load_settings, save_settings

__all__ = ["Export", "load_settings", "save_settings"]
