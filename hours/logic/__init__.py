"""Core schedule logic layer.

Subpackages:
- overlap: linear-axis interval math shared by every other module
- resolver: exception resolution (weekly plan + special days -> effective day)
- templates: custom shift template catalog
- bulk: whole-week edits
- exceptions: special-day management
- reporting: natural-language preview of a week
- validation: reservation conflict evaluation
- autosave / editor: debounced commit of editor sessions
"""
__all__ = ["overlap", "resolver", "templates", "bulk", "exceptions", "reporting",
           "validation", "autosave", "editor"]
