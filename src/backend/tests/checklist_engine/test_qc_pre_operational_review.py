from common.checklist_engine.rules.pre_operational_review import QC_PRE_OPERATIONAL_REVIEW


def test_pre_operational_all_comply_no_flags(run_rule):
    raw = {"items": [{"comply": True, "correctiveActionComply": True, "observation": ""}]}
    assert run_rule(QC_PRE_OPERATIONAL_REVIEW, raw) == []


def test_pre_operational_failed_item(run_rule):
    raw = {"items": [{"comply": True}, {"comply": False}]}
    flags = run_rule(QC_PRE_OPERATIONAL_REVIEW, raw)
    assert [f.key for f in flags] == ["items[1]"]


def test_pre_operational_observation_alone_triggers(run_rule):
    raw = {"items": [{"comply": True, "correctiveActionObservation": "re-cleaned belt"}]}
    flags = run_rule(QC_PRE_OPERATIONAL_REVIEW, raw)
    assert len(flags) == 1
    assert flags[0].values["correctiveActionObservation"] == "re-cleaned belt"


def test_pre_operational_whitespace_observation_ignored(run_rule):
    raw = {"items": [{"comply": True, "observation": "   "}]}
    assert run_rule(QC_PRE_OPERATIONAL_REVIEW, raw) == []
