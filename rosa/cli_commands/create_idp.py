from dataclasses import (
    dataclass,
    field,
)

from rosa.utils import interactive
from rosa.utils.interactive import (
    Input,
    InteractiveInputError,
)
from rosa.utils.ocm.base import (
    IDENTITY_PROVIDER_TYPES,
    OCMOIdentityProvider,
    OCMOIdentityProviderGithub,
    OCMOIdentityProviderGithubSettings,
    OCMOIdentityProviderGitlab,
    OCMOIdentityProviderGitlabSettings,
    OCMOIdentityProviderGoogle,
    OCMOIdentityProviderGoogleSettings,
    OCMOIdentityProviderHtpasswd,
    OCMOIdentityProviderHtpasswdSettings,
    OCMOIdentityProviderMappingMethod,
    OCMOIdentityProviderOidc,
    OCMOIdentityProviderOidcOpenId,
    OCMOIdentityProviderOidcOpenIdClaims,
)
from rosa.utils.ocm.identity_providers import next_identity_provider_name


class CreateIdpError(Exception):
    pass


def _split(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


@dataclass
class CreateIdpCommandData:
    idp_type: str = ""
    name: str = ""
    mapping_method: str = OCMOIdentityProviderMappingMethod.CLAIM.value
    client_id: str = ""
    client_secret: str = ""
    organizations: str = ""
    teams: str = ""
    hostname: str = ""
    host_url: str = ""
    hosted_domain: str = ""
    issuer_url: str = ""
    email_claims: str = ""
    name_claims: str = ""
    username_claims: str = ""
    groups_claims: str = ""
    username: str = ""
    password: str = ""
    existing: list[OCMOIdentityProvider] = field(default_factory=list)


class CreateIdpCommand:
    def __init__(self, command_data: CreateIdpCommandData):
        self._command_data = command_data

    def _require(self, attr: str, question: str, help: str = "") -> str:
        value = getattr(self._command_data, attr)
        if value:
            return value
        try:
            return interactive.get_string(
                Input(question=question, help=help, required=True)
            )
        except InteractiveInputError as e:
            raise CreateIdpError(f"Expected a valid {question}: {e}") from None

    def _idp_type(self) -> str:
        idp_type = self._command_data.idp_type
        if not idp_type:
            try:
                idp_type = interactive.get_option(
                    Input(
                        question="Type of identity provider",
                        options=list(IDENTITY_PROVIDER_TYPES),
                        required=True,
                    )
                )
            except InteractiveInputError as e:
                raise CreateIdpError(f"Expected a valid IdP type: {e}") from None
        if idp_type not in IDENTITY_PROVIDER_TYPES:
            raise CreateIdpError(
                f"Invalid IdP type '{idp_type}', expected one of: "
                f"{', '.join(IDENTITY_PROVIDER_TYPES)}"
            )
        return idp_type

    def _mapping_method(self) -> OCMOIdentityProviderMappingMethod:
        try:
            return OCMOIdentityProviderMappingMethod(self._command_data.mapping_method)
        except ValueError:
            valid = ", ".join(m.value for m in OCMOIdentityProviderMappingMethod)
            raise CreateIdpError(
                f"Invalid mapping method '{self._command_data.mapping_method}', "
                f"expected one of: {valid}"
            ) from None

    def _github(self, name: str) -> OCMOIdentityProvider:
        data = self._command_data
        return OCMOIdentityProviderGithub(
            name=name,
            mapping_method=self._mapping_method(),
            github=OCMOIdentityProviderGithubSettings(
                client_id=self._require("client_id", "client ID"),
                client_secret=self._require("client_secret", "client secret"),
                hostname=data.hostname or None,
                organizations=_split(data.organizations) or None,
                teams=_split(data.teams) or None,
            ),
        )

    def _gitlab(self, name: str) -> OCMOIdentityProvider:
        return OCMOIdentityProviderGitlab(
            name=name,
            mapping_method=self._mapping_method(),
            gitlab=OCMOIdentityProviderGitlabSettings(
                client_id=self._require("client_id", "client ID"),
                client_secret=self._require("client_secret", "client secret"),
                url=self._require(
                    "host_url", "GitLab host URL", "URL of the GitLab instance."
                ),
            ),
        )

    def _google(self, name: str) -> OCMOIdentityProvider:
        data = self._command_data
        return OCMOIdentityProviderGoogle(
            name=name,
            mapping_method=self._mapping_method(),
            google=OCMOIdentityProviderGoogleSettings(
                client_id=self._require("client_id", "client ID"),
                client_secret=self._require("client_secret", "client secret"),
                hosted_domain=data.hosted_domain or None,
            ),
        )

    def _openid(self, name: str) -> OCMOIdentityProvider:
        data = self._command_data
        claims = OCMOIdentityProviderOidcOpenIdClaims()
        if data.email_claims:
            claims.email = _split(data.email_claims)
        if data.name_claims:
            claims.name = _split(data.name_claims)
        if data.username_claims:
            claims.preferred_username = _split(data.username_claims)
        if data.groups_claims:
            claims.groups = _split(data.groups_claims)
        return OCMOIdentityProviderOidc(
            name=name,
            mapping_method=self._mapping_method(),
            open_id=OCMOIdentityProviderOidcOpenId(
                client_id=self._require("client_id", "client ID"),
                client_secret=self._require("client_secret", "client secret"),
                issuer=self._require(
                    "issuer_url",
                    "issuer URL",
                    "The URL that the OpenID Provider asserts as the Issuer "
                    "Identifier.",
                ),
                claims=claims,
            ),
        )

    def _htpasswd(self, name: str) -> OCMOIdentityProvider:
        return OCMOIdentityProviderHtpasswd(
            name=name,
            mapping_method=self._mapping_method(),
            htpasswd=OCMOIdentityProviderHtpasswdSettings(
                username=self._require("username", "username"),
                password=self._require("password", "password"),
            ),
        )

    def execute(self) -> OCMOIdentityProvider:
        idp_type = self._idp_type()
        name = self._command_data.name or next_identity_provider_name(
            idp_type, self._command_data.existing
        )
        if any(idp.name == name for idp in self._command_data.existing):
            raise CreateIdpError(f"An identity provider named '{name}' already exists")
        builders = {
            "github": self._github,
            "gitlab": self._gitlab,
            "google": self._google,
            "openid": self._openid,
            "htpasswd": self._htpasswd,
        }
        return builders[idp_type](name)
