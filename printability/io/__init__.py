from .loaders import load_mesh, load_parameter_catalog
from .exporters import save_analysis_json

__all__ = [
    'load_mesh',
    'load_parameter_catalog',
    'save_analysis_json',
]
