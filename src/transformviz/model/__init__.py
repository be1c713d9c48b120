from transformviz.model.geometry import HomogeneousPoint, Point, apply_matrix, is_affine, projective_divide
from transformviz.model.pipeline import TransformedPoint, is_fully_finite, transform_shape
from transformviz.model.shape import Corner, make_rectangle
