"""
Example: Basic ragkit Usage

This example demonstrates how to build a loader from stored configuration
through the component registry and extract content from an HTML page.
"""

from ragkit import get_registry

# Configuration as it would be stored by an admin UI
LOADER_OPTIONS = {
    "contentExtraction": [
        {
            "url": "https://example.com/blog/*",
            "selectors": [
                {"selector": "meta[name=description]", "type": "dom-content-attr"},
                {"selector": "article h1"},
                {"selector": "article p", "all": True},
            ],
        }
    ]
}

PAGE = b"""<html>
<head><meta name="description" content="Release notes for 2.0"></head>
<body>
  <nav>Home | Blog | About</nav>
  <article>
    <h1>Version 2.0</h1>
    <p>Faster extraction.</p>
    <p>New <b>selector</b> rules.</p>
  </article>
</body>
</html>
"""


def list_components():
    """List the registered components."""
    print("=" * 60)
    print("Registered components")
    print("=" * 60)

    registry = get_registry()
    for definition in registry.list_definitions():
        print(f"  {definition.identifier:<22} {definition.kind.value:<10} {definition.display_name}")


def extract_page():
    """Extract content with URL-scoped rules."""
    print("\n" + "=" * 60)
    print("HTML extraction")
    print("=" * 60)

    loader = get_registry().create("rag.loader.html2", LOADER_OPTIONS)

    for url in ("https://example.com/blog/v2", "https://example.com/about"):
        content = loader.load(PAGE, url)
        print(f"\nURL: {url}")
        print(f"Digest: {content.digest}")
        for segment, partition in zip(content.segments, content.metadata.partitions):
            print(f"  [{partition.selector}] {segment!r}")
        for warning in content.warnings:
            print(f"  warning: {warning}")


def split_page():
    """Split extracted content into chunks."""
    print("\n" + "=" * 60)
    print("Splitting")
    print("=" * 60)

    registry = get_registry()
    loader = registry.create("rag.loader.html2", LOADER_OPTIONS)
    splitter = registry.create("rag.splitter.text", {"chunk_size": 20, "chunk_overlap": 0})

    content = loader.load(PAGE, "https://example.com/blog/v2")
    for chunk in splitter.split(content):
        print(f"  #{chunk.index} segment={chunk.segment_index} {chunk.content!r}")


if __name__ == "__main__":
    list_components()
    extract_page()
    split_page()
