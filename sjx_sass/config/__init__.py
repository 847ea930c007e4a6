from .load import load_options
from .model import CompileOptions, Dialect, OutputStyle

__all__ = ["CompileOptions", "Dialect", "OutputStyle", "load_options"]
