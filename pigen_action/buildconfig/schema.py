"""Pydantic model for the pi-gen build configuration.

This module defines the user-facing build options, their mapping onto
pi-gen's ``config`` file keys, and the serialization of a configuration
into that file format.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Field name -> pi-gen config key, in file order.
CONFIG_KEYS: dict[str, str] = {
    "img_name": "IMG_NAME",
    "release": "RELEASE",
    "deploy_compression": "DEPLOY_COMPRESSION",
    "compression_level": "COMPRESSION_LEVEL",
    "locale_default": "LOCALE_DEFAULT",
    "target_hostname": "TARGET_HOSTNAME",
    "keyboard_keymap": "KEYBOARD_KEYMAP",
    "keyboard_layout": "KEYBOARD_LAYOUT",
    "timezone_default": "TIMEZONE_DEFAULT",
    "first_user_name": "FIRST_USER_NAME",
    "first_user_pass": "FIRST_USER_PASS",
    "wpa_essid": "WPA_ESSID",
    "wpa_password": "WPA_PASSWORD",
    "wpa_country": "WPA_COUNTRY",
    "enable_ssh": "ENABLE_SSH",
    "pubkey_ssh_first_user": "PUBKEY_SSH_FIRST_USER",
    "pubkey_only_ssh": "PUBKEY_ONLY_SSH",
    "stage_list": "STAGE_LIST",
    "use_qcow2": "USE_QCOW2",
}


class PiGenConfig(BaseModel):
    """User options for a pi-gen build.

    Every value is a string, as pi-gen reads them from a shell-sourced file.
    Fields accept either their snake_case name or the camelCase form
    (``firstUserName``). Optional fields left unset are omitted from the
    generated config file.

    Attributes:
        img_name: Name of the resulting image.
        release: Debian release to base the image on.
        deploy_compression: Compression of the exported image.
        compression_level: Compression level, a single digit.
        locale_default: Default system locale.
        target_hostname: Hostname of the image.
        keyboard_keymap: Default keyboard keymap.
        keyboard_layout: Default keyboard layout.
        timezone_default: System timezone.
        first_user_name: Name of the initial user.
        first_user_pass: Password of the initial user.
        wpa_essid: Wi-Fi network name.
        wpa_password: Wi-Fi passphrase.
        wpa_country: Wi-Fi country code.
        enable_ssh: Whether to enable the SSH server ("0"/"1").
        pubkey_ssh_first_user: Public key authorized for the initial user.
        pubkey_only_ssh: Whether to disable SSH password logins ("0"/"1").
        stage_list: Space-separated stage names and/or stage directories.
        use_qcow2: Whether pi-gen builds on qcow2 images ("0"/"1").
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    img_name: str = Field(default="test", description="Image name")
    release: str = Field(default="bullseye", description="Debian release")
    deploy_compression: str = Field(default="zip", description="Image compression")
    compression_level: str = Field(default="6", description="Compression level")
    locale_default: str = Field(default="en_GB.UTF-8", description="Default locale")
    target_hostname: str = Field(default="raspberrypi", description="Hostname")
    keyboard_keymap: str = Field(default="gb", description="Keyboard keymap")
    keyboard_layout: str = Field(default="English (UK)", description="Keyboard layout")
    timezone_default: str = Field(default="Europe/London", description="Timezone")
    first_user_name: str = Field(default="pi", description="Initial user name")
    first_user_pass: str | None = Field(default=None, description="Initial password")
    wpa_essid: str | None = Field(default=None, description="Wi-Fi ESSID")
    wpa_password: str | None = Field(default=None, description="Wi-Fi password")
    wpa_country: str | None = Field(default=None, description="Wi-Fi country")
    enable_ssh: str = Field(default="0", description="Enable SSH server")
    pubkey_ssh_first_user: str | None = Field(
        default=None, description="SSH public key for the initial user"
    )
    pubkey_only_ssh: str = Field(default="0", description="Disable SSH passwords")
    stage_list: str = Field(
        default="stage0 stage1 stage2", description="Stages to build"
    )
    use_qcow2: str = Field(default="1", description="Build on qcow2 images")

    def stages(self) -> list[str]:
        """Return the whitespace-separated entries of the stage list."""
        return self.stage_list.split()


DEFAULT_CONFIG = PiGenConfig()


def to_config_text(config: PiGenConfig) -> str:
    """Serialize a configuration into pi-gen config file content.

    Produces one ``KEY="value"`` line per non-empty field, in declaration
    order. Values are written verbatim.

    Args:
        config: Configuration to serialize.

    Returns:
        Config file content.
    """
    lines = []
    for field_name, key in CONFIG_KEYS.items():
        value = getattr(config, field_name)
        if value:
            lines.append(f'{key}="{value}"')
    return "\n".join(lines)


def config_keys(text: str) -> list[str]:
    """Return the keys assigned in pi-gen config file content, in order."""
    keys = []
    for line in text.splitlines():
        key, sep, _ = line.partition("=")
        if sep and key.strip():
            keys.append(key.strip())
    return keys


__all__ = [
    "CONFIG_KEYS",
    "DEFAULT_CONFIG",
    "PiGenConfig",
    "config_keys",
    "to_config_text",
]
