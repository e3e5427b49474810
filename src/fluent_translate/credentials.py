from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account


log = logging.getLogger("fluent_translate.credentials")

TRANSLATION_SCOPE = "https://www.googleapis.com/auth/cloud-translation"


class CredentialsError(RuntimeError):
    pass


@dataclass
class ServiceCredentials:
    credentials: service_account.Credentials
    project_id_override: str | None = None

    @classmethod
    def load(
        cls,
        path: str | Path,
        project_id: str | None = None,
        scope: str = TRANSLATION_SCOPE,
    ) -> "ServiceCredentials":
        path = Path(path)
        if not path.exists():
            log.error("you must provide a credentials file (looked for %s)", path)
            raise CredentialsError(f"missing credentials file: {path}")
        try:
            credentials = service_account.Credentials.from_service_account_file(
                str(path), scopes=[scope]
            )
        except (OSError, ValueError) as exc:
            raise CredentialsError(f"invalid service account file {path}: {exc}") from exc
        return cls(credentials=credentials, project_id_override=project_id)

    def get_project_id(self) -> str:
        project_id = self.project_id_override or self.credentials.project_id
        if not project_id:
            raise CredentialsError("GCP project id is missing from the credentials file")
        return project_id

    def get_access_token(self, request: Request | None = None) -> str:
        if not self.credentials.valid:
            try:
                self.credentials.refresh(request or Request())
            except google.auth.exceptions.GoogleAuthError as exc:
                raise CredentialsError(f"failed to get access token: {exc}") from exc
        token = self.credentials.token
        if not token:
            raise CredentialsError("failed to get access token: empty token")
        return token
