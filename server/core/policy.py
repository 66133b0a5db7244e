# server/core/policy.py


def can_mutate(post, caller_id: str) -> bool:
    """Only the author of a post may change it."""
    return post.author_id == caller_id
