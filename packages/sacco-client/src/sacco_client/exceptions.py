class ApiError(Exception):
    """Error envelope returned by the Village SACCO API server."""

    def __init__(self, status_code: int, error: str, message: str):
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(f"API error {status_code} ({error}): {message}")
