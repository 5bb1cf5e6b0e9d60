def success(data=None, status=200, message=None):
    """Build the ``(body, status)`` pair every service returns."""
    body = {'ok': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return body, status
