from readinglog.models.sheet import Sheet, SheetRow

__all__ = ["Sheet", "SheetRow"]
