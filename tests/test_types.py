from __future__ import annotations

import pytest

from popgen_hub.core.exceptions import ConfigurationError, InputValidationError
from popgen_hub.core.types import Alignment, Statistic, WindowSpec, WindowStatistic


def test_window_spec_parse():
    spec = WindowSpec.parse("100,10,watterson")
    assert (spec.width, spec.step, spec.statistic) == (100, 10, WindowStatistic.WATTERSON)
    assert WindowSpec.parse("5, 1").statistic is WindowStatistic.DIVERSITY
    assert WindowSpec.parse("5,1,D").statistic is WindowStatistic.TAJIMA_D
    assert WindowSpec.parse("5,1,pi").statistic is WindowStatistic.DIVERSITY


@pytest.mark.parametrize("text", ["0,1", "5,0", "-3,1", "a,1", "5", "5,1,fst", "5,1,pi,extra"])
def test_window_spec_rejects_invalid(text):
    with pytest.raises(ConfigurationError):
        WindowSpec.parse(text)


def test_window_statistic_resolution():
    assert WindowStatistic.DIVERSITY.resolve(per_site=True) is Statistic.PI_PER_SITE
    assert WindowStatistic.DIVERSITY.resolve(per_site=False) is Statistic.PI
    assert WindowStatistic.WATTERSON.resolve(per_site=False) is Statistic.THETA_W
    assert WindowStatistic.TAJIMA_D.resolve(per_site=False) is Statistic.TAJIMA_D


def test_forced_diversity():
    spec = WindowSpec(10, 2, WindowStatistic.TAJIMA_D).forced_diversity()
    assert spec == WindowSpec(10, 2, WindowStatistic.DIVERSITY)


def test_alignment_requires_rows():
    with pytest.raises(InputValidationError):
        Alignment(name="empty", rows=[])


def test_alignment_normalises_sequences():
    alignment = Alignment(name="a", rows=[("x", "ac gt"), ("y", "ACGA")])
    assert alignment.sequences == ["ACGT", "ACGA"]
    assert alignment.width == 4
