from .points import load_points, load_points_from_fvecs_file, write_points_fvecs

__all__ = ["load_points", "load_points_from_fvecs_file", "write_points_fvecs"]
