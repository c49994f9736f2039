# -*- coding: utf-8 -*-
"""
Tunable Parameter and Versioning Tests - Annotated params and decorators.

Tests the ``Range`` / ``Options`` / ``Desc`` markers, ``ParamSpec``
validation, collection through ``__init_subclass__``, runtime resolution,
the ``@processor_version`` / ``@processor_tags`` decorators, and the
missing-version warning.

Dependencies
------------
pytest

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-09

Modified
--------
2026-03-02
"""

import warnings
from typing import Annotated

import pytest

from gridlab.exceptions import InvalidParameterError
from gridlab.image_processing.base import GridTransform, ImageProcessor
from gridlab.image_processing.filters import ConvolutionFilter, MedianFilter
from gridlab.image_processing.noise import SaltAndPepperNoise
from gridlab.image_processing.params import (
    Desc,
    Options,
    ParamMeta,
    ParamSpec,
    Range,
    collect_param_specs,
)
from gridlab.image_processing.versioning import processor_tags, processor_version
from gridlab.vocabulary import ProcessorCategory


# ---------------------------------------------------------------------------
# Constraint markers
# ---------------------------------------------------------------------------

class TestMarkers:
    """Test Range, Options, and Desc markers."""

    def test_range(self):
        r = Range(min=0.0, max=1.0)
        assert (r.min, r.max) == (0.0, 1.0)
        assert isinstance(r, ParamMeta)
        assert 'min=0.0' in repr(r)

    def test_range_defaults_none(self):
        r = Range()
        assert r.min is None
        assert r.max is None

    def test_options(self):
        assert Options('a', 'b').choices == ('a', 'b')

    def test_options_empty_raises(self):
        with pytest.raises(ValueError, match="at least one"):
            Options()

    def test_desc(self):
        assert Desc('text').text == 'text'


# ---------------------------------------------------------------------------
# ParamSpec validation
# ---------------------------------------------------------------------------

class TestParamSpec:
    """Test ParamSpec.validate."""

    def test_int_accepted_as_float(self):
        ParamSpec('x', float).validate(1)

    def test_bool_rejected_for_int(self):
        with pytest.raises(TypeError, match="x"):
            ParamSpec('x', int).validate(True)

    def test_wrong_type(self):
        with pytest.raises(TypeError, match="x"):
            ParamSpec('x', float).validate('bad')

    def test_bounds_inclusive(self):
        spec = ParamSpec('x', float, min_value=0.0, max_value=1.0)
        spec.validate(0.0)
        spec.validate(1.0)
        with pytest.raises(InvalidParameterError, match="below minimum"):
            spec.validate(-0.1)
        with pytest.raises(InvalidParameterError, match="above maximum"):
            spec.validate(1.1)

    def test_choices(self):
        spec = ParamSpec('m', str, choices=('a', 'b'))
        spec.validate('b')
        with pytest.raises(InvalidParameterError, match="not in allowed choices"):
            spec.validate('c')

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            ParamSpec('x', int, min_value=1).validate(0)


# ---------------------------------------------------------------------------
# Collection and resolution
# ---------------------------------------------------------------------------

class TestCollection:
    """Test annotation collection and runtime resolution."""

    def test_plain_annotations_ignored(self):
        class C:
            a: int = 1
            b: Annotated[int, 'not a marker'] = 2
        assert collect_param_specs(C) == ()

    def test_declaration_order_and_metadata(self):
        class C:
            first: Annotated[float, Range(min=0.0), Desc('one')] = 1.0
            second: Annotated[str, Options('x', 'y')] = 'x'
        specs = collect_param_specs(C)
        assert [s.name for s in specs] == ['first', 'second']
        assert specs[0].min_value == 0.0
        assert specs[0].description == 'one'
        assert specs[1].choices == ('x', 'y')
        assert specs[1].default == 'x'

    def test_range_and_options_exclusive(self):
        class C:
            bad: Annotated[int, Range(min=0), Options(1, 2)] = 1
        with pytest.raises(TypeError, match="mutually exclusive"):
            collect_param_specs(C)

    def test_subclass_specs_populated(self):
        names = [s.name for s in MedianFilter.__param_specs__]
        assert names == ['window_size']
        conv = {s.name for s in ConvolutionFilter.__param_specs__}
        assert conv == {'normalize', 'degeneracy'}

    def test_resolve_prefers_kwargs(self):
        f = SaltAndPepperNoise(0.1, 0.2)
        params = f._resolve_params({'salt_probability': 0.3, 'workers': 4})
        assert params['pepper_probability'] == 0.1
        assert params['salt_probability'] == 0.3
        assert 'workers' not in params

    def test_resolve_validates(self):
        f = SaltAndPepperNoise(0.1, 0.2)
        with pytest.raises(InvalidParameterError):
            f._resolve_params({'pepper_probability': 2.0})


# ---------------------------------------------------------------------------
# Decorators and version warning
# ---------------------------------------------------------------------------

class TestVersioning:
    """Test @processor_version, @processor_tags, and the missing-version warning."""

    def test_stamps_version(self):
        @processor_version('2.1.0')
        class _Versioned(GridTransform):
            def apply(self, source, **kwargs):
                return source

        assert _Versioned.__processor_version__ == '2.1.0'

    def test_returns_same_class(self):
        class _Original(GridTransform):
            def apply(self, source, **kwargs):
                return source

        assert processor_version('1.0.0')(_Original) is _Original

    def test_default_version_is_string(self):
        @processor_version()
        class _Default(ImageProcessor):
            pass

        assert isinstance(_Default.__processor_version__, str)
        assert _Default.__processor_version__

    def test_warns_once_for_unversioned(self):
        class _Unversioned(GridTransform):
            def apply(self, source, **kwargs):
                return source

        with pytest.warns(UserWarning, match="does not declare a processor version"):
            _Unversioned()
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            _Unversioned()

    def test_no_warning_for_versioned(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            MedianFilter()

    def test_tags(self):
        @processor_tags(category=ProcessorCategory.RESAMPLE, description='d')
        class _Tagged(GridTransform):
            def apply(self, source, **kwargs):
                return source

        assert _Tagged.__processor_tags__ == {
            'category': ProcessorCategory.RESAMPLE,
            'description': 'd',
        }

    def test_tags_reject_string_category(self):
        with pytest.raises(TypeError, match="ProcessorCategory"):
            processor_tags(category='filters')

    def test_categories_match_shipped_processors(self):
        assert {c.value for c in ProcessorCategory} == {
            'filters', 'noise', 'matching', 'resample',
        }
