import logging
import os

from pubbench.errors import ConfigurationError, PayloadGenerationError

logger = logging.getLogger(__name__)


class RandomPayload:

    @staticmethod
    def generate(size: int) -> bytes:
        """
        Generate the payload shared by every publish call of a run.

        :param size: payload length in bytes
        :return: ``size`` bytes from the OS cryptographic random source
        """
        if size < 0:
            raise ConfigurationError(f"payload size must be >= 0, got {size}")

        try:
            payload = os.urandom(size)
        except (OSError, NotImplementedError) as e:
            raise PayloadGenerationError(f"Failed to generate {size} random bytes: {e}") from e

        if len(payload) != size:
            raise PayloadGenerationError(f"Random source returned {len(payload)} bytes, expected {size}")

        logger.info(f"Generated random payload of {size} bytes")
        return payload
