"""Blog topic ideas."""

from .main import generate_topic_ideas, parse_topic_list

__all__ = ["generate_topic_ideas", "parse_topic_list"]
