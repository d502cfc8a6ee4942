"""Tests for settings validation utilities."""

from __future__ import annotations

from typing import Dict

from calculator_engine import CalculatorEngine
from config_validation import DEFAULT_SETTINGS, resolve_settings, validate_configuration


def build_settings(**overrides: Dict[str, object]):
    settings = {
        'significant_digits': 12,
        'font_scale': 100,
        'theme': 'Dark',
        'log_retention': 30,
    }
    settings.update(overrides)
    return settings


def validate_single_issue(settings, field):
    issues = validate_configuration(settings)
    assert len(issues) == 1, "Expected exactly one validation issue"
    assert issues[0].field == field
    return issues[0]


def test_valid_configuration_passes():
    assert validate_configuration(build_settings()) == []


def test_missing_keys_use_defaults():
    assert validate_configuration({}) == []


def test_string_values_from_settings_store_are_accepted():
    settings = build_settings(significant_digits='10', font_scale=' 120 ', log_retention='90')
    assert validate_configuration(settings) == []


def test_significant_digits_range_enforced():
    issue = validate_single_issue(build_settings(significant_digits=16), 'significant_digits')
    assert 'between 1 and 15 digits' in issue.message


def test_significant_digits_must_be_numeric():
    issue = validate_single_issue(build_settings(significant_digits='twelve'), 'significant_digits')
    assert issue.title == 'Precision Invalid'


def test_boolean_is_not_a_number():
    issue = validate_single_issue(build_settings(font_scale=True), 'font_scale')
    assert 'whole number' in issue.message


def test_font_scale_range_enforced():
    issue = validate_single_issue(build_settings(font_scale=200), 'font_scale')
    assert '80 and 140%' in issue.message


def test_log_retention_range_enforced():
    issue = validate_single_issue(build_settings(log_retention=2), 'log_retention')
    assert 'between 7 and 365 days' in issue.message


def test_unknown_theme_rejected():
    issue = validate_single_issue(build_settings(theme='Neon'), 'theme')
    assert 'Dark, Light' in issue.message


def test_resolve_settings_replaces_invalid_fields_with_defaults():
    resolved, issues = resolve_settings(build_settings(font_scale=500, significant_digits='8'))
    assert [issue.field for issue in issues] == ['font_scale']
    assert resolved == {
        'significant_digits': 8,
        'font_scale': DEFAULT_SETTINGS['font_scale'],
        'theme': 'Dark',
        'log_retention': 30,
    }


def test_resolve_settings_fills_missing_keys():
    resolved, issues = resolve_settings({'theme': 'Light'})
    assert issues == []
    assert resolved == dict(DEFAULT_SETTINGS, theme='Light')


def test_unset_or_invalid_precision_keeps_twelve_digit_rounding():
    for stored in ({}, build_settings(significant_digits=0)):
        resolved, _ = resolve_settings(stored)
        engine = CalculatorEngine(resolved['significant_digits'])
        engine.digit('1')
        engine.operator_press('/')
        engine.digit('3')
        engine.equals()
        assert engine.state.display == '0.333333333333'
