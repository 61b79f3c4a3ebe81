from sitecrawl.services.crawl_policy import CrawlPolicy


def test_substring_match_blacklists():
    policy = CrawlPolicy(["/admin/", "/fileadmin/"])
    assert policy.is_blacklisted("http://h/admin/login")
    assert policy.is_blacklisted("http://h/fileadmin/doc.pdf")
    assert not policy.is_blacklisted("http://h/public")


def test_no_filters_never_blacklists():
    policy = CrawlPolicy()
    assert not policy.is_blacklisted("http://h/admin/login")


def test_empty_filter_entry_matches_every_url():
    # Result of `-filter ""`: the empty string is a substring of everything.
    policy = CrawlPolicy([""])
    assert policy.is_blacklisted("http://h/")
    assert policy.is_blacklisted("http://h/anything")


def test_matching_is_literal_not_a_pattern():
    policy = CrawlPolicy(["*.pdf"])
    assert not policy.is_blacklisted("http://h/doc.pdf")
    assert policy.is_blacklisted("http://h/*.pdf")
