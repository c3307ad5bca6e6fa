import pytest
from PIL import Image

from iview.config import load_config
from iview.errors import MissingApplication
from iview.viewer import ImageViewer, is_color_image

IJ = "/opt/ImageJ/ImageJ"
FIJI = "/opt/Fiji.app/ImageJ-linux64"


@pytest.fixture
def config():
    return load_config(platform="linux", environ={})


@pytest.fixture
def temp_names(tmp_path, monkeypatch):
    def fake(name, extension, tag):
        return str(tmp_path / f"{name or 'TempFile'}-{tag}{extension}")

    monkeypatch.setattr("iview.viewer.build_full_file_name", fake)
    return tmp_path


def test_build_command_linux_imagej(config):
    viewer = ImageViewer(config, IJ)
    argv = viewer.build_command("/tmp/x.tif")
    assert argv == [IJ, "-e", 'open("/tmp/x.tif"); rename("/tmp/x.tif");']


def test_build_command_uses_title(config):
    viewer = ImageViewer(config, IJ)
    viewer.title = "Brain scan"
    argv = viewer.build_command("/tmp/x.tif")
    assert argv[-1] == 'open("/tmp/x.tif"); rename("Brain scan");'


def test_fiji_uses_fiji_command(config):
    viewer = ImageViewer(config, FIJI)
    assert viewer.select_template() == config.fiji_command
    assert viewer.select_template(is_color=True) == config.fiji_command
    assert viewer.build_command("/tmp/x.tif")[1] == "-eval"


def test_color_command_for_imagej(config):
    viewer = ImageViewer(config, IJ)
    assert viewer.select_template(is_color=True) == config.color_command
    assert "Make Composite" in viewer.build_command("/tmp/x.tif", is_color=True)[-1]


def test_custom_command_overrides(config):
    viewer = ImageViewer(config, FIJI)
    viewer.set_command("%a --show")
    assert viewer.command == "%a --show"
    assert viewer.build_command("/tmp/x.tif", is_color=True) == [FIJI, "--show", "/tmp/x.tif"]
    viewer.clear_command()
    assert viewer.command == config.view_command


def test_application_discovered_when_not_given(config, monkeypatch):
    seen = {}

    def fake(names, path):
        seen["names"] = names
        return IJ

    monkeypatch.setattr("iview.viewer.find_viewing_application", fake)
    viewer = ImageViewer(config)
    assert viewer.application == IJ
    assert seen["names"] == config.executable_names


def test_execute_writes_and_launches(config, temp_names, fake_popen):
    viewer = ImageViewer(config, IJ)
    path, argv = viewer.execute(Image.new("L", (2, 2)), "my img")
    assert path.startswith(str(temp_names))
    assert path.endswith(config.file_extension)
    with Image.open(path) as im:
        assert im.size == (2, 2)
    assert fake_popen.calls == [argv]
    assert argv[0] == IJ


def test_execute_color_image(config, temp_names, fake_popen):
    viewer = ImageViewer(config, IJ)
    _, argv = viewer.execute(Image.new("RGB", (2, 2)))
    assert "Make Composite" in argv[-1]


def test_execute_without_application_writes_nothing(config, temp_names, fake_popen):
    viewer = ImageViewer(config, "")
    with pytest.raises(MissingApplication):
        viewer.execute(Image.new("L", (2, 2)), "x")
    assert list(temp_names.iterdir()) == []
    assert fake_popen.calls == []


def test_show_file(config, tmp_path, fake_popen):
    img = tmp_path / "a.png"
    Image.new("L", (2, 2)).save(img)
    viewer = ImageViewer(config, IJ)
    viewer.set_command("%a")
    argv = viewer.show_file(img)
    assert argv == [IJ, str(img.resolve())]
    assert fake_popen.calls == [argv]


def test_show_file_missing(config, tmp_path):
    viewer = ImageViewer(config, IJ)
    with pytest.raises(FileNotFoundError):
        viewer.show_file(tmp_path / "nope.png")


@pytest.mark.parametrize("mode, color", [("L", False), ("I;16", False), ("RGB", True), ("RGBA", True)])
def test_is_color_image(mode, color):
    assert is_color_image(Image.new(mode, (1, 1))) is color
