"""
Credential files - client secret loading and token persistence.

Both files live under ~/.config/gcal-conky by default (see Settings).
The token file is created with 0600 permissions.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from gcal_conky.environments.base import CredentialsError
from gcal_conky.environments.google.auth.schemas import GoogleAuthConfig, StoredToken


logger = logging.getLogger("gcal_conky.environments.google.auth")


def load_client_config(path: Union[str, Path]) -> GoogleAuthConfig:
    """
    Read the OAuth client secret file.

    Raises:
        CredentialsError: If the file is missing, unreadable or not a
            Google client secret
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CredentialsError(f"Unable to read client secret file: {e}", path=str(path))
    except json.JSONDecodeError as e:
        raise CredentialsError(f"Client secret file is not valid JSON: {e}", path=str(path))

    try:
        return GoogleAuthConfig.from_client_secrets(data)
    except (KeyError, ValidationError, AttributeError) as e:
        raise CredentialsError(f"Unable to parse client secret file to config: {e}", path=str(path))


class TokenStore:
    """
    JSON file holding the OAuth token between runs.

    Attributes:
        path: Token file location
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Optional[StoredToken]:
        """
        Load the persisted token.

        Returns:
            The token, or None if no token has been saved yet

        Raises:
            CredentialsError: If the file exists but cannot be parsed
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CredentialsError(f"Unable to read token file: {e}", path=str(self.path))

        try:
            return StoredToken.model_validate_json(raw)
        except ValidationError as e:
            raise CredentialsError(f"Token file is invalid: {e}", path=str(self.path))

    def save(self, token: StoredToken) -> None:
        """
        Persist the token, creating the parent directory if needed.

        Raises:
            CredentialsError: If the file cannot be written
        """
        logger.info(f"Saving credential file to: {self.path}")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(token.model_dump_json())
        except OSError as e:
            raise CredentialsError(f"Unable to cache oauth token: {e}", path=str(self.path))
