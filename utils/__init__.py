from utils.endpoints import get_base_url, get_path  # noqa: F401
from utils.response_utils import dump_error, dump_result, robust_parse_text  # noqa: F401
