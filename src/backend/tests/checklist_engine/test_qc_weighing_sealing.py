from common.checklist_engine.rules.weighing_sealing import QC_WEIGHING_SEALING


def test_weighing_sealing_all_sealed(run_rule):
    raw = {"bag_entries": [{"sealed": ["Comply", "Comply"]}]}
    assert run_rule(QC_WEIGHING_SEALING, raw) == []


def test_weighing_sealing_not_comply_token(run_rule):
    raw = {"bag_entries": [{"sealed": ["Comply"]}, {"sealed": ["Not comply - open edge"]}]}
    flags = run_rule(QC_WEIGHING_SEALING, raw)
    assert [f.key for f in flags] == ["bag_entries[1]"]
