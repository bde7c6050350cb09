"""
Vault provisioning service.

Makes sure the destination vault exists before any archive data is sent.
"""
from ..protocols import GlacierApiProtocol
from ...api.errors import GlacierAPIError
from ...exceptions import UploadError, UploadErrorKind
from ...logging import get_logger


class VaultEnsurer:
    """
    Creates the destination vault if it does not exist yet.

    Only a "not found" answer from describe leads to creation; any other
    describe failure is reported as is, so repeated runs never create a
    vault twice or hide an access problem behind a create call.
    """

    def __init__(self, api: GlacierApiProtocol):
        self._api = api
        self._logger = get_logger('glacierpy.upload.vault')

    async def ensure(self, vault_name: str) -> None:
        """
        Ensure vault_name exists.

        Raises:
            UploadError: CONTAINER_DESCRIBE_FAILED or CONTAINER_CREATE_FAILED
        """
        if await self._vault_exists(vault_name):
            self._logger.debug(f"Found vault {vault_name}")
            return

        self._logger.info(f"Creating vault {vault_name}")
        try:
            await self._api.create_vault(vault_name)
        except Exception as e:
            self._logger.error(f"Failed to create vault {vault_name}")
            raise UploadError(UploadErrorKind.CONTAINER_CREATE_FAILED, str(e)) from e

    async def _vault_exists(self, vault_name: str) -> bool:
        try:
            await self._api.describe_vault(vault_name)
        except Exception as e:
            if isinstance(e, GlacierAPIError) and e.is_not_found:
                return False
            self._logger.error(f"Failed to get info for vault {vault_name}")
            raise UploadError(UploadErrorKind.CONTAINER_DESCRIBE_FAILED, str(e)) from e
        return True
