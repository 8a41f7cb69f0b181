from csssweep.search.extractor import extract_candidates
from csssweep.search.index import SearchIndex, build_search_index, index_from_text

__all__ = ["extract_candidates", "SearchIndex", "build_search_index", "index_from_text"]
