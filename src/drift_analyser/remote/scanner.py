"""
Remote Scanner Module.

Runs every enumerator on a thread pool and gathers their resources. Results
are collected in registration order, so the returned list does not depend on
which enumerator finishes first.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from botocore.exceptions import ClientError

from ...utils import setup_logging
from ..alerter import Alerter, alert_key
from ..analysis import Alert
from ..errors import EnumerationError
from ..output.progress import Progress
from ..resource import Resource
from ..resources import provider_of

logger = setup_logging()

ACCESS_DENIED_CODES = frozenset(
    {
        "AccessDenied",
        "AccessDeniedException",
        "AuthorizationError",
        "UnauthorizedOperation",
    }
)


def is_access_denied(error: Exception) -> bool:
    if not isinstance(error, ClientError):
        return False
    code = error.response.get("Error", {}).get("Code", "")
    return code in ACCESS_DENIED_CODES


class Enumerator(ABC):
    """Lists every live resource of one type."""

    provider: str = ""
    resource_type: str = ""
    # Terraform attribute names this enumerator reads; None means all of them
    attributes: Optional[Tuple[str, ...]] = None

    @abstractmethod
    def enumerate(self) -> List[Resource]:
        """Returns the live resources of resource_type."""


class RemoteScanner:
    def __init__(
        self,
        enumerators: Sequence[Enumerator],
        alerter: Alerter,
        max_workers: int = 4,
        progress: Optional[Progress] = None,
    ) -> None:
        self.enumerators = list(enumerators)
        self.alerter = alerter
        self.max_workers = max_workers
        self.progress = progress

    def _enumerate(self, enumerator: Enumerator) -> List[Resource]:
        try:
            resources = enumerator.enumerate()
            logger.debug(
                f"Found {len(resources)} {enumerator.resource_type} resources"
            )
            return resources
        except ClientError as e:
            if not is_access_denied(e):
                raise EnumerationError(enumerator.resource_type, str(e)) from e
            logger.warning(
                f"Access denied listing {enumerator.resource_type}, ignoring it: {e}"
            )
            self.alerter.send_alert(
                alert_key(
                    enumerator.provider or provider_of(enumerator.resource_type),
                    enumerator.resource_type,
                ),
                Alert(
                    f"Ignoring {enumerator.resource_type} from drift calculation: "
                    f"Listing {enumerator.resource_type} is forbidden."
                ),
            )
            return []
        except EnumerationError:
            raise
        except Exception as e:
            raise EnumerationError(enumerator.resource_type, str(e)) from e
        finally:
            if self.progress is not None:
                self.progress.tic()

    def scan(self) -> List[Resource]:
        """
        Enumerates every resource type.

        Raises:
            EnumerationError: If an enumerator fails for a reason other than
                missing permissions
        """
        if not self.enumerators:
            return []
        with ThreadPoolExecutor(max_workers=max(1, self.max_workers)) as executor:
            futures = [
                executor.submit(self._enumerate, enumerator)
                for enumerator in self.enumerators
            ]
            resources: List[Resource] = []
            for future in futures:
                resources.extend(future.result())
        logger.info(f"Found {len(resources)} remote resources")
        return resources
