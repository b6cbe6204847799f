class PostError(Exception):
    """Base error of the posts domain"""


class PostValidationError(PostError):
    """A post is missing a required field or carries an inconsistent one"""

    def __init__(self, message: str, fields: tuple = ()):
        super().__init__(message)
        self.fields = tuple(fields)


class PostNotFoundError(PostError):
    """No post is stored under the requested id"""

    def __init__(self, post_id):
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id
