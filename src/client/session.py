from src.client.errors import AuthenticationError


class Session:
    """
    Bearer credential of one logged-in user.

    Created by a successful login and closed at logout. A closed session
    refuses to produce headers, so no request can be sent with it.
    """

    def __init__(self, token: str, token_type: str = "bearer"):
        self._token = token
        self.token_type = token_type
        self.active = True

    @property
    def token(self) -> str:
        return self._token

    def authorization_headers(self) -> dict:
        if not self.active:
            raise AuthenticationError("Session has been closed, log in again")
        return {"Authorization": f"Bearer {self._token}"}

    def close(self) -> None:
        self.active = False

    def __repr__(self) -> str:
        state = "active" if self.active else "closed"
        return f"<Session {state}>"
