
from .models import PagerankOptions, PagerankResult, ToleranceNorm
from .graph import Graph, TransposeGraph, transpose_with_degree
from .dynamic import AffectedVertices, dynamic_vertices
from .monolithic import pagerank_monolithic_seq, pagerank_monolithic_seq_dynamic, pagerank_monolithic_seq_loop
from .reference import pagerank_reference
