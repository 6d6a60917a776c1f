from activity_log.core.exceptions.error_messages import ErrorKey


class AppException(Exception):
    """
        Custom exception class for handling application-specific exceptions.

        This exception takes an error key and an optional status code, the
        message itself is resolved later from the error messages module so it
        can follow the caller's language.

        Attributes:
            error_key (ErrorKey): Key used to fetch the error message.
            status_code (int): The HTTP status code associated with the error (default: 400).
            error_detail (str): Internal detail, only exposed in dev.
            error_variables (tuple[str, ...]): Values formatted into the message.

        Example:
            ```python
            raise AppException(ErrorKey.CLIENT_NOT_FOUND, status_code=404)
            ```
        """
    def __init__(self, error_key: ErrorKey, status_code=400, error_detail="", error_obj=None,
                 error_variables: tuple[str, ...] = ()):
        self.error_key: ErrorKey = error_key
        self.status_code = status_code
        self.error_detail = error_detail
        self.error_obj = error_obj
        self.error_variables = error_variables
        super().__init__(error_key.value)
