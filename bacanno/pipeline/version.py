__version__ = "1.2.0"
__git_revision__ = ""
