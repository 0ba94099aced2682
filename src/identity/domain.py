"""Identity bounded context — marketplace accounts, credentials and session tokens."""

from protean.domain import Domain
from shared.logging import configure_logging, get_logger

configure_logging(log_file_prefix="identity")

logger = get_logger(__name__)

# Domain Composition Root
identity = Domain(name="identity")
