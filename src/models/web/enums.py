from enum import Enum


class WebEnum(str, Enum):
    """
    String enumeration used by the Web Apps API.

    Lookup by value is case-insensitive so that user input such as
    "integrated" resolves to the canonical member ``Integrated``.
    """

    @classmethod
    def _missing_(cls, value: object) -> "WebEnum | None":
        if isinstance(value, str):
            folded = value.casefold()
            for member in cls:
                if member.value.casefold() == folded:
                    return member
        return None

    def __str__(self) -> str:
        return self.value


class ManagedPipelineMode(WebEnum):
    """IIS managed pipeline mode."""

    CLASSIC = "Classic"
    INTEGRATED = "Integrated"


class ScmType(WebEnum):
    """Source control integration of the site."""

    NONE = "None"
    DROPBOX = "Dropbox"
    TFS = "Tfs"
    LOCAL_GIT = "LocalGit"
    GIT_HUB = "GitHub"
    CODE_PLEX_GIT = "CodePlexGit"
    CODE_PLEX_HG = "CodePlexHg"
    BITBUCKET_GIT = "BitbucketGit"
    BITBUCKET_HG = "BitbucketHg"
    EXTERNAL_GIT = "ExternalGit"
    EXTERNAL_HG = "ExternalHg"
    ONE_DRIVE = "OneDrive"
    VSO = "VSO"
    VSTSRM = "VSTSRM"


class FtpsState(WebEnum):
    """FTP / FTPS service state."""

    ALL_ALLOWED = "AllAllowed"
    FTPS_ONLY = "FtpsOnly"
    DISABLED = "Disabled"


class SupportedTlsVersions(WebEnum):
    """Minimum TLS version accepted by the site."""

    ONE_FULL_STOP_ZERO = "1.0"
    ONE_FULL_STOP_ONE = "1.1"
    ONE_FULL_STOP_TWO = "1.2"
