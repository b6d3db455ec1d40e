"""
Python client for the Study Notes API

Keeps the session cookie between calls and caches reads in a QueryCache.
Every mutation invalidates the cached reads it can affect.
"""
from typing import Any, Dict, List, Optional
import httpx
from .query_cache import QueryCache
from ..schemas import User, Project, File
import logging

logger = logging.getLogger(__name__)

ME_PATH = "/api/auth/me"
PROJECTS_PATH = "/api/projects"


class ApiError(Exception):
    """Raised for any non-2xx response"""
    
    def __init__(self, status_code: int, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
    
    def __repr__(self):
        return f"ApiError(status_code={self.status_code}, message='{self.message}')"


class StudyNotesClient:
    """Session-aware client for the Study Notes REST API"""
    
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http_client: Optional[httpx.Client] = None,
        cache: Optional[QueryCache] = None,
        timeout: float = 10.0,
    ):
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self.cache = cache or QueryCache()
    
    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()
    
    def __enter__(self):
        return self
    
    def __exit__(self, *exc_info):
        self.close()
    
    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = self._http.request(method, path, json=json)
        if response.is_error:
            message = f"HTTP error! status: {response.status_code}"
            errors = None
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = body.get("message") or message
                errors = body.get("errors")
            logger.debug(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiError(response.status_code, message, errors)
        return response.json()
    
    def _query(self, path: str) -> Dict[str, Any]:
        return self.cache.get_or_fetch(path, lambda: self._request("GET", path))
    
    # Auth
    
    def register(self, username: str, email: str, password: str) -> User:
        data = self._request("POST", "/api/auth/register", {"username": username, "email": email, "password": password})
        self.cache.clear()
        self.cache.set(ME_PATH, data)
        return User.model_validate(data["user"])
    
    def login(self, email: str, password: str) -> User:
        data = self._request("POST", "/api/auth/login", {"email": email, "password": password})
        self.cache.clear()
        self.cache.set(ME_PATH, data)
        return User.model_validate(data["user"])
    
    def logout(self) -> str:
        try:
            data = self._request("POST", "/api/auth/logout")
        finally:
            self.cache.clear()
        return data["message"]
    
    def current_user(self) -> Optional[User]:
        """The logged-in user, or None when there is no valid session"""
        try:
            data = self._query(ME_PATH)
        except ApiError as e:
            if e.status_code == 401:
                return None
            raise
        return User.model_validate(data["user"])
    
    def is_authenticated(self) -> bool:
        return self.current_user() is not None
    
    # Profile
    
    def update_profile(self, preferred_model: Optional[str] = None, api_key: Optional[str] = None) -> User:
        payload = {}
        if preferred_model is not None:
            payload["preferredModel"] = preferred_model
        if api_key is not None:
            payload["apiKey"] = api_key
        data = self._request("PUT", "/api/profile", payload)
        self.cache.set(ME_PATH, data)
        return User.model_validate(data["user"])
    
    # Projects
    
    def list_projects(self) -> List[Project]:
        data = self._query(PROJECTS_PATH)
        return [Project.model_validate(p) for p in data["projects"]]
    
    def create_project(self, name: str, category: str, description: Optional[str] = None) -> Project:
        payload = {"name": name, "category": category}
        if description is not None:
            payload["description"] = description
        data = self._request("POST", PROJECTS_PATH, payload)
        self.cache.invalidate(PROJECTS_PATH)
        return Project.model_validate(data["project"])
    
    def get_project(self, project_id: str) -> Project:
        """Not cached: reading a project moves it to the top of the list"""
        data = self._request("GET", f"{PROJECTS_PATH}/{project_id}")
        self.cache.invalidate(PROJECTS_PATH)
        return Project.model_validate(data["project"])
    
    def update_project(self, project_id: str, **fields: Any) -> Project:
        data = self._request("PUT", f"{PROJECTS_PATH}/{project_id}", fields)
        self.cache.invalidate(PROJECTS_PATH)
        return Project.model_validate(data["project"])
    
    def delete_project(self, project_id: str) -> str:
        data = self._request("DELETE", f"{PROJECTS_PATH}/{project_id}")
        self.cache.invalidate_prefix(PROJECTS_PATH)
        return data["message"]
    
    # Files
    
    def list_files(self, project_id: str) -> List[File]:
        data = self._query(f"{PROJECTS_PATH}/{project_id}/files")
        return [File.model_validate(f) for f in data["files"]]
    
    def add_file(self, project_id: str, name: str, type: str = "document", size: int = 0, url: Optional[str] = None) -> File:
        payload = {"name": name, "type": type, "size": size}
        if url is not None:
            payload["url"] = url
        data = self._request("POST", f"{PROJECTS_PATH}/{project_id}/files", payload)
        self.cache.invalidate(PROJECTS_PATH)
        self.cache.invalidate(f"{PROJECTS_PATH}/{project_id}/files")
        return File.model_validate(data["file"])
    
    def delete_file(self, project_id: str, file_id: str) -> str:
        data = self._request("DELETE", f"{PROJECTS_PATH}/{project_id}/files/{file_id}")
        self.cache.invalidate(PROJECTS_PATH)
        self.cache.invalidate(f"{PROJECTS_PATH}/{project_id}/files")
        return data["message"]
