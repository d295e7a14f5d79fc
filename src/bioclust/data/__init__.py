from .readers import read_binary_matrix, read_binary_vector, read_distance_matrix, read_points

__all__ = ["read_binary_matrix", "read_binary_vector", "read_distance_matrix", "read_points"]
