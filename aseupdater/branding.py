"""Centralized branding constants — single source of truth for version."""


class AppBranding:
    """Application identity constants."""

    APP_NAME = "ASE Extension Updater"
    VERSION = "0.2.0"

    # Installable bundles are recognised by this suffix only
    BUNDLE_EXTENSION = ".aseprite-extension"

    # package.json key an extension author adds to opt in
    OPT_IN_KEY = "asepriteExtensionUpdater"

    @classmethod
    def user_agent(cls) -> str:
        return f"ase-extension-updater/{cls.VERSION}"
