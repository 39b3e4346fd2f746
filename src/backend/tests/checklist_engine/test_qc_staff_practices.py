from common.checklist_engine.rules.staff_practices import QC_STAFF_PRACTICES

ALL_COMPLY = {
    "staffAppearance": "Comply",
    "completeUniform": "Comply",
    "accessoriesAbsence": "Comply",
    "workToolsUsage": "Comply",
    "cutCleanNotPolishedNails": "Comply",
    "noMakeupOn": "Comply",
    "staffBehavior": "Comply",
    "staffHealth": "Comply",
}


def test_staff_practices_all_comply(run_rule):
    assert run_rule(QC_STAFF_PRACTICES, {"personnel_materials": [dict(ALL_COMPLY)]}) == []


def test_staff_practices_failed_parameters_listed(run_rule):
    person = {**ALL_COMPLY, "noMakeupOn": "No comply", "staffHealth": "No comply"}
    flags = run_rule(QC_STAFF_PRACTICES, {"personnel_materials": [dict(ALL_COMPLY), person]})
    assert len(flags) == 1
    assert flags[0].key == "personnel_materials[1]"
    assert flags[0].values["parameters"] == ["noMakeupOn", "staffHealth"]


def test_staff_practices_observation_triggers(run_rule):
    person = {**ALL_COMPLY, "observation": "hair net replaced"}
    flags = run_rule(QC_STAFF_PRACTICES, {"personnel_materials": [person]})
    assert len(flags) == 1


def test_staff_practices_unknown_status_not_a_failure(run_rule):
    person = {**ALL_COMPLY, "staffBehavior": "N/A"}
    assert run_rule(QC_STAFF_PRACTICES, {"personnel_materials": [person]}) == []
