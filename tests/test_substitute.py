import pytest

from iview.command.substitute import substitute
from iview.errors import MissingApplication, ViewerError


APP = "/Apps/IJ"
FILE = "/tmp/img.nii"
TITLE = "MyTitle"


@pytest.mark.parametrize(
    "template, expected",
    [
        ("", ""),
        ("plain text", "plain text"),
        ("%%", "%"),
        ("100%% sure", "100% sure"),
        ("%a", APP),
        ("%t", TITLE),
        ("%f", FILE),
        ("%a %f %t", f"{APP} {FILE} {TITLE}"),
        ("%f,%f", f"{FILE},{FILE}"),
        ("%x", "%x"),
        ("50%", "50%"),
        ("%%a", "%a"),
        ("%%%f", "%" + FILE),
        ("%x%t", "%x" + TITLE),
    ],
)
def test_substitute_output(template, expected):
    resolved, _ = substitute(template, APP, FILE, TITLE)
    assert resolved == expected


@pytest.mark.parametrize(
    "template, seen",
    [("", False), ("%a %t", False), ("%f", True), ("x %%f", False), ("'%f'", True)],
)
def test_substitute_file_flag(template, seen):
    _, file_seen = substitute(template, APP, FILE, TITLE)
    assert file_seen is seen


def test_percent_percent_ignores_inputs():
    assert substitute("%%", "", "", "") == ("%", False)


def test_missing_application_raises():
    with pytest.raises(MissingApplication):
        substitute("%a", "", FILE, TITLE)


def test_missing_application_is_viewer_error():
    with pytest.raises(ViewerError, match="No ImageJ/Fiji application found"):
        substitute("run %a -e %f", "", FILE, TITLE)


def test_empty_app_fine_without_app_token():
    assert substitute("open %f", "", FILE, TITLE) == ("open " + FILE, True)


def test_empty_file_and_title_substitute_as_empty():
    assert substitute("[%f][%t]", APP, "", "") == ("[][]", True)
