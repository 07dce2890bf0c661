import pytest

pytest.importorskip("matplotlib")

from vesselgen.edit import default_control_points
from vesselgen.figures import make_profile_figure
from vesselgen.models import BaseParameters


def test_profile_figure_png(tmp_path):
    out = tmp_path / "profile.png"
    path = make_profile_figure(default_control_points(), BaseParameters(), out, dpi=72)
    assert path == str(out)
    assert out.stat().st_size > 0


def test_profile_figure_svg(tmp_path):
    out = tmp_path / "profile.svg"
    make_profile_figure([(50.0, 0.0), (45.0, 150.0)], BaseParameters(wall_thickness=4.0), out)
    assert out.read_text().lstrip().startswith("<")
