from app.services.template_inspect import extract_snippets, is_split_across_runs, scan_template
from tests.docx_helpers import build_template, build_zip


def test_clean_template():
    scan = scan_template(build_template())
    assert scan.media_entries == ["word/media/image1.png"]
    assert scan.found_in_document
    assert scan.marker_ok


def test_template_without_picture_reports_issue():
    scan = scan_template(build_template(with_image=False))
    assert scan.media_entries == []
    assert any("No media entries" in issue for issue in scan.issues)


def test_split_runs_detected():
    xml = "<w:p><w:r><w:t>{{MAP_</w:t></w:r><w:r><w:t>QR}}</w:t></w:r></w:p>"
    assert is_split_across_runs(xml, "{{MAP_QR}}")
    assert not is_split_across_runs("<w:t>{{MAP_QR}}</w:t>", "{{MAP_QR}}")

    scan = scan_template(build_zip({"word/document.xml": xml}))
    assert scan.split_across_runs
    assert not scan.marker_ok


def test_header_and_spacing_detected():
    scan = scan_template(build_zip({
        "word/document.xml": "<w:t>body</w:t>",
        "word/header1.xml": "<w:t>{{ MAP_QR }}</w:t>",
    }))
    assert scan.in_header_footer
    assert scan.spaced_tag
    assert not scan.found_in_document


def test_textbox_and_wrong_delimiter():
    scan = scan_template(build_zip({
        "word/document.xml": "<w:txbxContent><w:t>{{MAP_QR}}</w:t></w:txbxContent>",
        "word/footer2.xml": "<w:t>[MAP_QR]</w:t>",
    }))
    assert scan.in_textbox
    assert scan.wrong_delimiter


def test_missing_marker():
    scan = scan_template(build_zip({"word/document.xml": "<w:t>nothing</w:t>"}))
    assert not scan.found_any_tag
    assert "MAP_QR marker not found in any XML part." in scan.issues


def test_extract_snippets():
    xml = "a" * 200 + "MAP_QR" + "b" * 200 + "MAP_QR"
    snippets = extract_snippets(xml, "MAP_QR", window=5)
    assert snippets == ["aaaaaMAP_QRbbbbb", "bbbbbMAP_QR"]
