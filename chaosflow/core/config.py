"""Environment-driven defaults for the chaosflow codec."""

import os

API_VERSION = os.getenv("CHAOSFLOW_API_VERSION", "chaos-mesh.org/v1alpha1")

# Namespace used for host experiments and as the last resort for metadata.namespace.
DEFAULT_NAMESPACE = os.getenv("CHAOSFLOW_DEFAULT_NAMESPACE", "default")

# "k8s" targets cluster experiments, anything else targets physical hosts.
DEFAULT_ENV = os.getenv("CHAOSFLOW_ENV", "k8s")

ENTRY_TEMPLATE_NAME = "entry"
