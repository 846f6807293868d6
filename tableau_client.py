import json
import logging
import re
from dataclasses import fields
from datetime import timedelta
from typing import Any, Dict, Optional, Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from xsdata.formats.dataclass.context import XmlContext
from xsdata.formats.dataclass.serializers import DictFactory, JsonSerializer

from enums.site_role import SiteRole
from exceptions.tableau_authentication_exception import TableauAuthenticationException
from exceptions.tableau_exception import TableauException
from exceptions.tableau_request_exception import TableauRequestException
from exceptions.tableau_response_exception import TableauResponseException
from exceptions.tableau_transport_exception import TableauTransportException
from models.tableau_config import TableauConfig
from models.tableau_session import TableauSession
from models.ts_api import CredentialsType, SiteType, TsRequest, UserType


class TableauClient:
    """
    Python client for the user administration and trusted ticket
    endpoints of the Tableau Server REST API.

    Usage::

        client = TableauClient("https://tableau.example.com", "admin", "secret", "mysite")
        client.sign_in()
        user = client.add_user("alice", SiteRole.Viewer)
        client.sign_out()
    """

    _DEFAULT_API_VERSION = "2.5"
    _DEFAULT_TIMEOUT = timedelta(seconds=30)
    _MAX_REDIRECTS = 10
    _REFUSED_TICKET = "-1"

    _API_VERSION_REGEX = re.compile(r"^\d+(\.\d+)?$")

    def __init__(self,
                 server_url: str,
                 admin_user: str,
                 admin_password: str,
                 site_id: str,
                 api_version: str = _DEFAULT_API_VERSION,
                 timeout: Optional[Union[int, float, timedelta]] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the Tableau client. No request is sent until sign_in is called.

        Args:
            server_url: The base URL of the Tableau Server (e.g., https://my-tableau-server.com)
            admin_user: Name of the administrator making the calls
            admin_password: Password of the administrator
            site_id: Site on which user and group actions are performed
            api_version: Tableau API version to use
            timeout: Request timeout (default: 30 seconds)
            logger: Logger instance for debugging
        """
        self._check_null_parameters(("server_url", server_url))

        self.log = logger or logging.getLogger(__name__)

        self._server_url = server_url
        self._admin_user = admin_user
        self._admin_password = admin_password
        self._site_id = site_id
        self._api_version = self._parse_api_version(api_version)

        if timeout is None:
            self.timeout = self._DEFAULT_TIMEOUT
        elif isinstance(timeout, (int, float)):
            self.timeout = timedelta(seconds=timeout)
        elif isinstance(timeout, timedelta):
            self.timeout = timeout
        else:
            raise TypeError("timeout must be int, float, or timedelta")

        self._session: Optional[TableauSession] = None
        self._last_ticket: Optional[str] = None

        # Unset (None) fields are left out of request bodies
        self.json_serializer = JsonSerializer(
            context=XmlContext(),
            dict_factory=DictFactory.FILTER_NONE
        )

        self.log.debug(f"Created TableauClient for tableau base url: '{server_url}', "
                       f"api version: {self._api_version}, site: '{site_id}'")

    @classmethod
    def from_config(cls, config: TableauConfig, logger: Optional[logging.Logger] = None) -> "TableauClient":
        """Build a client from a TableauConfig, e.g. TableauConfig.from_env()"""
        return cls(config.server_url,
                   config.admin_user,
                   config.admin_password,
                   config.site_id,
                   api_version=config.api_version,
                   timeout=config.timeout,
                   logger=logger)

    def __enter__(self) -> "TableauClient":
        self.sign_in()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if not self.is_signed_in:
            return
        if exc_type is None:
            self.sign_out()
            return
        # Keep the exception raised in the with block, a failed sign out is only logged
        try:
            self.sign_out()
        except TableauException as e:
            self.log.warning(f"Could not sign out from Tableau Server: {e}")

    #
    # Accessors
    #

    @property
    def api_version(self) -> str:
        return self._api_version

    @api_version.setter
    def api_version(self, value: str):
        self._api_version = self._parse_api_version(value)

    @property
    def server_url(self) -> str:
        return self._server_url

    @server_url.setter
    def server_url(self, value: str):
        self._check_null_parameters(("server_url", value))
        self._server_url = value

    @property
    def admin_user(self) -> str:
        return self._admin_user

    @admin_user.setter
    def admin_user(self, value: str):
        self._admin_user = value

    @property
    def site_id(self) -> str:
        return self._site_id

    @site_id.setter
    def site_id(self, value: str):
        self._site_id = value

    @property
    def session(self) -> Optional[TableauSession]:
        return self._session

    @property
    def is_signed_in(self) -> bool:
        return self._session is not None

    @property
    def auth_token(self) -> Optional[str]:
        return self._session.token if self._session else None

    @property
    def last_ticket(self) -> Optional[str]:
        return self._last_ticket

    #
    # Authentication
    #

    def sign_in(self) -> bool:
        """
        Signs in with the administrator credentials and keeps the token for further calls.

        The site content url is always empty, so the default site is targeted
        no matter which site_id is configured. site_id only scopes the user
        and group endpoints.

        Raises:
            TableauAuthenticationException: the response carries no credentials token,
                or a blank one
        """
        credentials = CredentialsType(name=self._admin_user,
                                      password=self._admin_password,
                                      site=SiteType(content_url=""))
        response = self._send_api_request("auth/signin", "POST", credentials)

        credentials_element = response.get("credentials") if isinstance(response, dict) else None
        token = credentials_element.get("token") if isinstance(credentials_element, dict) else None
        if not isinstance(token, str) or not token.strip():
            self.log.error("Sign in response did not contain a credentials token")
            raise TableauAuthenticationException()

        site_element = credentials_element.get("site") or {}
        user_element = credentials_element.get("user") or {}
        self._session = TableauSession(token=token,
                                       site_luid=site_element.get("id"),
                                       user_id=user_element.get("id"))
        self.log.info(f"Signed in to Tableau Server as '{self._admin_user}'")
        return True

    def sign_out(self):
        """Signs out, the server invalidates the token and the client forgets it."""
        self._send_api_request("auth/signout", "POST")
        self._session = None
        self.log.info("Signed out from Tableau Server")

    #
    # Users and groups
    #

    def add_user(self, username: str, site_role: Union[str, SiteRole]) -> Optional[Dict[str, Any]]:
        """Adds a new user to the configured site and returns the decoded user resource."""
        if isinstance(site_role, SiteRole):
            site_role = site_role.value
        user = UserType(name=username, site_role=site_role)
        return self._send_api_request(f"sites/{self._site_id}/users", "POST", user)

    def add_user_to_group(self, user_id: str, group_id: str) -> Optional[Dict[str, Any]]:
        self._check_null_parameters(("user_id", user_id), ("group_id", group_id))
        user = UserType(id=user_id)
        return self._send_api_request(f"sites/{self._site_id}/groups/{group_id}/users", "POST", user)

    def remove_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        self._check_null_parameters(("user_id", user_id))
        return self._send_api_request(f"sites/{self._site_id}/users/{user_id}", "DELETE")

    #
    # Trusted authentication
    #

    def get_new_ticket(self, username: str, target_site: Optional[str] = None) -> Union[str, bool]:
        """
        Requests a trusted authentication ticket for embedding views as the given user.

        This goes to the trusted endpoint of the server, outside of the
        versioned REST API, and does not use the sign in token.

        Returns:
            The ticket, or False when the server refused to issue one
            (it answers -1 for untrusted hosts or unknown users).
        """
        full_uri = f"{self._base_url()}/trusted"
        body = {"username": username}
        if target_site is not None:
            body["target_site"] = target_site

        headers = {"content-type": "application/x-www-form-urlencoded"}
        content = self._api_request(full_uri, "POST", headers, body)

        if content.strip() == self._REFUSED_TICKET:
            self.log.warning(f"Tableau Server refused to issue a trusted ticket for user '{username}'")
            return False

        self._last_ticket = content
        return content

    #
    # Request helpers
    #

    def _check_null_parameters(self, *args):
        """Check null parameters"""
        for name, value in args:
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValueError(f"Argument {name} cannot be null")

    def _parse_api_version(self, api_version: str) -> str:
        if not isinstance(api_version, str) or not self._API_VERSION_REGEX.match(api_version):
            raise ValueError(f"'{api_version}' is not a valid Tableau API version (eg. 2.5)")
        return api_version

    def _base_url(self) -> str:
        return self._server_url.rstrip('/')

    def _build_uri(self, relative_path: str) -> str:
        """Build the full API URL"""
        if relative_path.startswith('/'):
            relative_path = relative_path[1:]
        return f"{self._base_url()}/api/{self._api_version}/{relative_path}"

    def _build_api_headers(self, auth_token: Optional[str]) -> Dict[str, str]:
        headers = {
            "accept": "application/json",
            "cache-control": "no-cache",
            "content-type": "application/json",
        }
        if auth_token:
            headers["X-Tableau-Auth"] = auth_token
        return headers

    def _build_client(self, headers: Dict[str, str]) -> requests.Session:
        """Build a requests session"""
        session = requests.Session()

        # Failures are reported to the caller straight away, never retried
        adapter = HTTPAdapter(max_retries=Retry(total=0, read=False))
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.max_redirects = self._MAX_REDIRECTS

        session.headers.clear()
        session.headers.update(headers)

        return session

    def _api_request(self, full_uri: str, method: str, headers: Dict[str, str], body=None) -> str:
        """Send a request to Tableau Server and return the raw response body"""
        try:
            self.log.info(f"Sending request to Tableau Server. Method: {method}, Url: '{full_uri}'")

            with self._build_client(headers) as http_session:
                request_params = {
                    'timeout': self.timeout.total_seconds(),
                }
                if body:
                    request_params['data'] = body

                response = http_session.request(method, full_uri, **request_params)

                if response.status_code >= 400:
                    raise TableauRequestException(full_uri, response.status_code, response.text)

                self.log.info("Request successful")
                return response.text

        except TableauRequestException as e:
            self.log.error(f"Tableau Server returned an error at request. Http code: {e.status_code}")
            raise
        except requests.RequestException as e:
            self.log.error(f"A network error occured while communicating with Tableau Server. "
                           f"Internal error message: {e}")
            raise TableauTransportException(full_uri, str(e)) from e

    def _send_api_request(self, action: str, method: str, request_object: Any = None) -> Any:
        """Send a request to the versioned REST API and decode the JSON answer"""
        full_uri = self._build_uri(action)
        body = self._get_object_as_request_content(request_object) if request_object is not None else None
        content = self._api_request(full_uri, method, self._build_api_headers(self.auth_token), body)
        return self._get_response_as_object(full_uri, content)

    def _get_response_as_object(self, full_uri: str, content: str) -> Any:
        """Decode a JSON response body, an empty body (204 No Content) decodes to None"""
        if not content or not content.strip():
            return None
        try:
            return json.loads(content)
        except ValueError as e:
            self.log.error(f"Failed to parse JSON response: {e}")
            raise TableauResponseException(full_uri, content) from e

    def _get_object_as_request_content(self, obj: Any) -> str:
        """
        Convert object to JSON request content.
        The object is placed in the TsRequest field of its type.
        """
        ts_request = TsRequest()

        for field in fields(ts_request):
            field_type = field.type

            # Handle Optional[T] types - extract the actual type
            if hasattr(field_type, '__origin__') and field_type.__origin__ is Union:
                non_none_args = [arg for arg in field_type.__args__ if arg is not type(None)]
                if non_none_args:
                    field_type = non_none_args[0]

            if isinstance(obj, field_type):
                setattr(ts_request, field.name, obj)
                break
        else:
            raise ValueError(f"Cannot map object type {type(obj).__name__} to any TsRequest field")

        return self.json_serializer.render(ts_request)
