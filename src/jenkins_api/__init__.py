"""
jenkins_api - Jenkins JSON API payloads as typed values.

Decode builds and change sets of any job type; unknown ones too.
"""

from jenkins_api.errors import (
    InvalidObjectType,
    JenkinsError,
    StructuralDecodeError,
)
from jenkins_api.models.build import BUILDS, decode_build, decode_build_json
from jenkins_api.models.records import CommonBuild, decode_build_record
from jenkins_api.registry import CLASS_REGISTRY, register_class

__version__ = "0.1.0"
__all__ = [
    "BUILDS",
    "CLASS_REGISTRY",
    "CommonBuild",
    "InvalidObjectType",
    "JenkinsError",
    "StructuralDecodeError",
    "__version__",
    "decode_build",
    "decode_build_json",
    "decode_build_record",
    "register_class",
]
