"""Router utilities."""

from .form_utils import parse_candidate_list, parse_form_flag

__all__ = ["parse_candidate_list", "parse_form_flag"]
