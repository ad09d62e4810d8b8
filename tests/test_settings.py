from turtle_preview_core.config import Settings


def test_settings_defaults() -> None:
    settings = Settings.model_validate({})
    assert settings.site_domain == "pencilcode.net"
    assert settings.checker_image_url == "/image/checker.png"


def test_settings_parses_aliases() -> None:
    settings = Settings.model_validate(
        {
            "PREVIEW_SITE_DOMAIN": "example.com",
            "PREVIEW_CHECKER_IMAGE_URL": "/static/checker.png",
        }
    )
    assert settings.site_domain == "example.com"
    assert settings.checker_image_url == "/static/checker.png"
