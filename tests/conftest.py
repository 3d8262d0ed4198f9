import pytest

from tests.docx_helpers import JOB, PAYLOAD, build_template


@pytest.fixture
def payload():
    return dict(PAYLOAD)


@pytest.fixture
def job():
    return dict(JOB)


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "outage_template.docx"
    path.write_bytes(build_template())
    return path
