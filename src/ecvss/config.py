"""Runtime defaults, overridable from the environment.

Explicit arguments always win; these only apply when a caller passes no
group at all.
"""

import os

GROUP_ENV_VAR = "ECVSS_GROUP"
DEFAULT_GROUP = "secp256k1"

# Tag hashed onto the group to derive the second Pedersen generator h.
# Changing it changes h and invalidates every existing Pedersen commitment.
PEDERSEN_H_TAG = b"ecvss/pedersen/h"


def default_group_name() -> str:
    """Name of the group used when none is given (ECVSS_GROUP, else secp256k1)."""
    return os.getenv(GROUP_ENV_VAR, DEFAULT_GROUP).strip().lower() or DEFAULT_GROUP
