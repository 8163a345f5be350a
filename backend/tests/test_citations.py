from chat_markdown.services.citations import Citation, build_footer


def test_display_domain_prefers_explicit_domain():
    c = Citation(id="1", title="USDA", url="https://fdc.nal.usda.gov/food", domain="usda.gov")
    assert c.display_domain == "usda.gov"


def test_display_domain_falls_back_to_url_host():
    c = Citation(id="1", title="Mayo", url="https://www.mayoclinic.org/healthy")
    assert c.display_domain == "www.mayoclinic.org"


def test_display_domain_falls_back_to_source():
    assert Citation(id="1", title="Book").display_domain == "Source"
    assert Citation(id="2", title="Relative", url="/local/path").display_domain == "Source"


def test_no_footer_without_citations():
    assert build_footer(None) is None
    assert build_footer([]) is None


def test_footer_is_collapsed_by_default():
    footer = build_footer([Citation(id="1", title="A", url="https://a.example")])

    assert footer is not None
    assert footer.expanded is False
    assert footer.summary == "1 source"
    assert footer.visible_entries() == []


def test_footer_entries_in_order():
    citations = [
        Citation(id="1", title="USDA FoodData Central", url="https://fdc.nal.usda.gov", snippet="Nutrient data"),
        Citation(id="2", title="Mayo Clinic", domain="mayoclinic.org"),
    ]
    footer = build_footer(citations).toggled()

    assert footer.expanded is True
    assert footer.summary == "2 sources"
    entries = footer.visible_entries()
    assert [e.badge for e in entries] == ["1", "2"]
    assert [e.domain_label for e in entries] == ["fdc.nal.usda.gov", "mayoclinic.org"]
    assert entries[1].url is None


def test_toggle_returns_new_footer():
    footer = build_footer([Citation(id="1", title="A")])
    opened = footer.toggled()

    assert footer.expanded is False
    assert opened.toggled().expanded is False
