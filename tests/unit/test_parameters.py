"""Test FitParameter and ParameterGroup models."""

import pytest
from pydantic import ValidationError

from ltfit.core.domain.parameters import FitParameter, GroupKind, ParameterGroup


class TestFitParameter:
    """Tests for FitParameter."""

    def test_basic_parameter(self):
        """Should create a parameter without fit results."""
        param = FitParameter(name="tau_1", alias="t1", start_value=180.0, lower_bound=50.0)
        assert param.label == "t1"
        assert param.fit_value is None
        assert param.fit_value_error is None
        assert param.is_bounded is True
        assert param.fixed is False

    def test_label_falls_back_to_name(self):
        """Label should be the name when no alias is set."""
        assert FitParameter(name="I_1", start_value=0.5).label == "I_1"

    def test_inverted_bounds_raise(self):
        """Should reject a lower bound above the upper bound."""
        with pytest.raises(ValidationError, match="lower bound"):
            FitParameter(name="bad", start_value=1.0, lower_bound=2.0, upper_bound=1.0)

    def test_assignment_is_validated(self):
        """Should validate bounds on assignment as well."""
        param = FitParameter(name="tau", start_value=1.0, upper_bound=5.0)
        with pytest.raises(ValidationError):
            param.lower_bound = 10.0

    def test_conflict_needs_fixed_and_bounded(self):
        """Only fixed and bounded parameters conflict."""
        assert FitParameter(name="a", start_value=1.0, fixed=True).has_conflict() is False
        assert FitParameter(name="b", start_value=1.0, lower_bound=0.0).has_conflict() is False
        assert FitParameter(name="c", start_value=1.0, fixed=True, upper_bound=2.0).has_conflict() is True

    def test_repr(self):
        """Should have a readable representation."""
        text = repr(FitParameter(name="fwhm", start_value=230.0, fixed=True))
        assert "fwhm" in text
        assert "fixed" in text


class TestParameterGroup:
    """Tests for ParameterGroup slot semantics."""

    def test_decay_group_components(self):
        """Source and sample groups hold (tau, I) pairs."""
        group = ParameterGroup.decays(
            GroupKind.SAMPLE,
            [
                (FitParameter(name="tau_1", start_value=180.0), FitParameter(name="I_1", start_value=0.7)),
                (FitParameter(name="tau_2", start_value=400.0), FitParameter(name="I_2", start_value=0.3)),
            ],
        )
        assert group.n_components == 2
        assert len(group) == 4
        tau, intensity = group.component(1)
        assert tau.name == "tau_2"
        assert intensity.name == "I_2"

    def test_incomplete_pair_rejected(self):
        """A decay group must hold complete pairs."""
        with pytest.raises(ValidationError, match="multiple of 2"):
            ParameterGroup(kind=GroupKind.SOURCE, parameters=[FitParameter(name="tau", start_value=1.0)])

    def test_incomplete_irf_triple_rejected(self):
        """An IRF group must hold complete triples."""
        params = [FitParameter(name=f"p{i}", start_value=1.0) for i in range(4)]
        with pytest.raises(ValidationError, match="multiple of 3"):
            ParameterGroup(kind=GroupKind.IRF, parameters=params)

    def test_background_needs_one_parameter(self):
        """The background group holds exactly one parameter."""
        with pytest.raises(ValidationError, match="exactly one"):
            ParameterGroup(kind=GroupKind.BACKGROUND, parameters=[])

    def test_background_factory(self):
        """Should build a fixed background by default."""
        group = ParameterGroup.background(3.0)
        (param,) = group.parameters
        assert param.start_value == 3.0
        assert param.fixed is True
        assert param.alias == "B"

    def test_conflicts_listed_by_alias(self):
        """Should list fixed-and-bounded parameters by alias."""
        group = ParameterGroup.irf(
            [
                (
                    FitParameter(name="fwhm", alias="FWHM", start_value=230.0, fixed=True, lower_bound=100.0),
                    FitParameter(name="mu", alias="mu", start_value=0.0, fixed=True),
                    FitParameter(name="I", alias="I_irf", start_value=1.0, fixed=True, upper_bound=1.0),
                )
            ]
        )
        assert group.conflicts() == ["FWHM", "I_irf"]
