"""Tests for tile markup and escaping."""

from animaltiles import markup
from animaltiles.tiles.base import TileDefinition, TileResult

TILE = TileDefinition(id='dog', title='Random Dog', fetcher=None)


class TestEscaping:
    def test_text_is_escaped(self):
        r = TileResult.success(None, '<script>alert("x")</script> & more')
        out = markup.build_markup(r, TILE)
        assert '<script>' not in out
        assert '&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt; &amp; more' in out

    def test_image_url_is_escaped_in_attribute(self):
        r = TileResult.success('https://x/a.png" onerror="evil()', 'fact')
        out = markup.build_markup(r, TILE)
        assert 'onerror="evil()"' not in out
        assert 'src="https://x/a.png&quot; onerror=&quot;evil()"' in out

    def test_error_is_escaped(self):
        out = markup.error_markup('<b>HTTP 500</b>')
        assert '&lt;b&gt;HTTP 500&lt;/b&gt;' in out
        assert 'retry-btn' in out

    def test_title_is_escaped(self):
        tile = TileDefinition(id='x', title='<i>Evil</i>', fetcher=None)
        assert '<i>' not in markup.tile_markup(tile, '')


class TestMarkup:
    def test_image_and_text(self):
        out = markup.build_markup(TileResult.success('https://x/a.png', 'fact'), TILE)
        assert '<img class="animal-img" data-tile="dog" src="https://x/a.png" alt="Random Dog image"' in out
        assert '<p class="tile-text" data-fact="fact">fact</p>' in out

    def test_no_image(self):
        out = markup.build_markup(TileResult.success(None, 'fact'), TILE)
        assert '<img' not in out

    def test_image_unavailable(self):
        out = markup.build_markup(TileResult.success('https://x/a.png', 'fact'), TILE, image_unavailable=True)
        assert '<img' not in out
        assert 'Image unavailable' in out

    def test_cached_badges(self):
        r = TileResult.success(None, 'fact')
        fresh = markup.cached_markup(r, TILE)
        stale = markup.cached_markup(r, TILE, stale=True)
        assert 'Cached' in fresh and 'Stale' not in fresh
        assert 'Cached' in stale and 'Stale' in stale


class TestSelectFallback:
    def test_known_tiles(self):
        assert markup.select_fallback('redpanda') == 'https://placehold.co/300x200?text=Red+Panda'
        assert markup.select_fallback('catfact') == 'https://placehold.co/300x200?text=Cat'
        assert markup.select_fallback('shiba') == markup.select_fallback('dog')

    def test_unknown_tile(self):
        assert markup.select_fallback('unicorn') == 'https://placehold.co/300x200?text=Animal'
        assert markup.select_fallback(None) == 'https://placehold.co/300x200?text=Animal'
