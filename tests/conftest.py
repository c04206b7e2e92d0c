import httpx
import pytest

from pcpreset.config import Config, TemplateConfig, TemplateSourceType

from .factories import make_archive, write_template


@pytest.fixture
def template_dir(tmp_path):
    return write_template(tmp_path / "template-src")


@pytest.fixture
def template_archive(template_dir):
    return make_archive(template_dir)


@pytest.fixture
def archive_transport(template_archive):
    """
    httpx transport serving the template archive, recording requested URLs.
    """
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(str(request.url))
        return httpx.Response(200, content=template_archive)

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport


@pytest.fixture
def workdir(tmp_path):
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def local_config(template_dir):
    """
    Configuration with a single local template, so no network is needed.
    """
    return Config(
        templates={
            "3": TemplateConfig(label="Vue 3.0", source=TemplateSourceType.LOCAL, locator=str(template_dir)),
        }
    )
