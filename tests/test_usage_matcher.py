"""Tests for translation key usage detection."""

import pytest

from codebase_analyzer.features.translation_tree import FlattenedKey, flatten_keys
from codebase_analyzer.features.usage_matcher import (
    KeyPatternSet,
    UsagePatternMatcher,
    UsageResult,
    build_call_pattern,
    search_key,
)


class TestStaticUsage:
    """Test cases for static key references."""

    @pytest.mark.parametrize('content', [
        "t('common.save')",
        't("common.save")',
        "t(`common.save`)",
        "i18n.t('common.save')",
        "$t( 'common.save' )",
        "translate('common.save')",
        "messages['common.save']",
        "const label = 'common.save';",
    ])
    def test_static_forms(self, content):
        """Quoted, called or indexed keys are static hits."""
        assert search_key('common.save', content) == (True, False)

    def test_property_access_of_trailing_segment(self):
        """messages.common.save counts through its last segment."""
        assert search_key('common.save', "return messages.common.save;") == (True, False)

    def test_longer_property_does_not_match(self):
        """The trailing segment must end at an identifier boundary."""
        assert search_key('common.save', "obj.saved()") == (False, False)

    def test_unrelated_content(self):
        """Content without the key reports nothing."""
        assert search_key('common.save', "console.log('hello')") == (False, False)


class TestDynamicUsage:
    """Test cases for dynamically built keys."""

    def test_template_literal(self):
        """t(`section.${key}`) is a dynamic use of keys below section."""
        assert search_key('section.title', "t(`section.${key}`)") == (True, True)

    def test_forward_concatenation(self):
        """t('section.' + name) is a dynamic use of section."""
        assert search_key('section.title', "t('section.' + name)") == (True, True)

    def test_reverse_concatenation(self):
        """t(prefix + 'errors') is a dynamic use of errors."""
        assert search_key('errors.network', "t(prefix + 'errors')") == (True, True)

    def test_prefix_must_end_on_segment_boundary(self):
        """subsection does not build keys below section."""
        assert search_key('section.title', "t(`subsection.${x}`)") == (False, False)

    def test_call_name_must_not_be_part_of_identifier(self):
        """list(`...`) is not a translation call."""
        assert search_key('section.title', "list(`section.${x}`)") == (False, False)

    def test_custom_call_names(self):
        """Only configured call names count as translation calls."""
        content = "tr(`section.${x}`)"

        assert search_key('section.title', content) == (False, False)
        assert search_key('section.title', content, call_names=['tr']) == (True, True)

    def test_shortest_prefix_reported(self):
        """The first matching prefix is the shortest."""
        pattern_set = KeyPatternSet.compile('a.b.c')

        assert pattern_set.dynamic_prefix("t(`a.${x}`)") == 'a'
        assert pattern_set.dynamic_prefix("t(`a.b.${x}`)") == 'a'
        assert pattern_set.dynamic_prefix("nothing") is None


class TestBuildCallPattern:
    """Test cases for build_call_pattern."""

    def test_empty_names_raise(self):
        """At least one call name is required."""
        with pytest.raises(ValueError):
            build_call_pattern([])

    def test_longest_name_first(self):
        """Longer names are tried before their suffixes."""
        pattern = build_call_pattern(['t', 'i18n.t'])

        assert pattern.index('i18n') < pattern.index('|t)')


class TestUsageResult:
    """Test cases for UsageResult."""

    def test_files_are_recorded_once(self):
        """Recording the same file twice lists it once."""
        result = UsageResult()

        result.record('a.ts')
        result.record('a.ts', dynamic=True)
        result.record('b.ts')

        assert result.found
        assert result.is_dynamic
        assert result.matched_files == ['a.ts', 'b.ts']


class TestUsagePatternMatcher:
    """Test cases for UsagePatternMatcher."""

    @pytest.fixture
    def keys(self):
        tree = {
            "section": {"title": "T", "body": "B"},
            "other": {"label": "L"},
        }
        return flatten_keys(tree)

    def test_dynamic_hit_marks_descendants(self, keys):
        """Every key below a dynamic prefix is used."""
        matcher = UsagePatternMatcher(keys)

        matcher.scan("t(`section.${key}`)", 'page.tsx')

        assert matcher.is_used('section.title')
        assert matcher.is_used('section.body')
        assert not matcher.is_used('other.label')
        assert sorted(matcher.dynamic_keys()) == ['section.body', 'section.title']
        assert [k.path for k in matcher.unused_keys()] == ['other.label']

    def test_dynamic_hit_independent_of_check_order(self, keys):
        """Descendants are marked even if they were checked before the hit."""
        matcher = UsagePatternMatcher(keys)
        body = next(p for p in matcher.pattern_sets if p.key == 'section.body')
        title = next(p for p in matcher.pattern_sets if p.key == 'section.title')

        assert matcher.check(body, "nothing here", 'a.ts') is False
        assert matcher.check(title, "t('section.' + name)", 'b.ts') is True

        assert matcher.is_used('section.body')
        assert matcher.results['section.body'].matched_files == ['b.ts']

    def test_matched_files_are_complete(self, keys):
        """Every file referencing a key is listed, once."""
        matcher = UsagePatternMatcher(keys)

        matcher.scan("t('other.label')", 'a.ts')
        matcher.scan("t('other.label')", 'b.ts')
        matcher.scan("t('other.label')", 'a.ts')

        assert matcher.matched_files_per_key() == {'other.label': ['a.ts', 'b.ts']}

    def test_scan_returns_found_count(self, keys):
        """scan reports how many keys the content references."""
        matcher = UsagePatternMatcher(keys)

        assert matcher.scan("t('section.title'); t('other.label')", 'a.ts') == 2

    def test_duplicate_paths_share_one_result(self):
        """Leaves flattening to the same path are tracked together."""
        keys = [
            FlattenedKey('a.b', 'nested', ('a', 'b')),
            FlattenedKey('a.b', 'dotted', ('a.b',)),
        ]
        matcher = UsagePatternMatcher(keys)

        assert len(matcher.pattern_sets) == 1
        assert [k.value for k in matcher.unused_keys()] == ['nested', 'dotted']

        matcher.scan("t('a.b')", 'a.ts')

        assert matcher.unused_keys() == []

    def test_descendants_of(self, keys):
        """Descendants include the prefix itself and stop at segment boundaries."""
        matcher = UsagePatternMatcher(keys)

        assert matcher.descendants_of('section') == ['section.title', 'section.body']
        assert matcher.descendants_of('section.title') == ['section.title']
        assert matcher.descendants_of('sec') == []
