from .file_finder import DirectoryFileFinder

__all__ = ["DirectoryFileFinder"]
