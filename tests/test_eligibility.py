from portal.services.eligibility import (
    branch_eligible, cgpa_eligible, is_eligible, filter_eligible
)


def placement(branches, criteria=None, name="Acme"):
    return {"company_name": name, "eligible_branches": branches, "cgpa_criteria": criteria}


def test_all_wildcard_with_no_student_cgpa_is_included():
    assert is_eligible("Civil", None, placement(["All"], 7.5))


def test_branch_mismatch_excluded_regardless_of_cgpa():
    assert not is_eligible("ECE", 9.8, placement(["CSE"]))
    assert not is_eligible("ECE", None, placement(["CSE"], 6.0))


def test_cgpa_below_criteria_excluded():
    assert not is_eligible("CSE", 7.9, placement(["CSE"], 8.0))


def test_cgpa_equal_to_criteria_included():
    assert is_eligible("CSE", 8.0, placement(["CSE"], 8.0))


def test_no_criteria_passes():
    assert cgpa_eligible(4.0, None)
    assert cgpa_eligible(None, None)


def test_branch_listed_among_others():
    assert branch_eligible("ISE", ["CSE", "ISE"])
    assert not branch_eligible("ISE", [])


def test_filter_keeps_order_and_subset():
    postings = [
        placement(["CSE"], 8.0, "A"),
        placement(["All"], None, "B"),
        placement(["ME"], None, "C"),
        placement(["CSE", "ECE"], 7.0, "D"),
    ]
    kept = filter_eligible("CSE", 7.5, postings)
    assert [p["company_name"] for p in kept] == ["B", "D"]


def test_filter_has_no_side_effects():
    postings = [placement(["CSE"], 9.0)]
    snapshot = [dict(p) for p in postings]
    filter_eligible("CSE", 5.0, postings)
    assert postings == snapshot
