from ..interfaces import AuthenticationServiceInterface, TMDBResponse, TMDBClientInterface

class AuthenticationService(AuthenticationServiceInterface):
    """Service class for guest session operations"""

    def __init__(self, client: TMDBClientInterface):
        self.client = client

    def create_guest_session(self) -> TMDBResponse:
        """Create a new guest session"""
        return self.client.make_request("authentication/guest_session/new")
