from common.checklist_engine.rules.monoproducto import QC_MONOPRODUCTO, is_bag_weight_field


def _mono(values, producto="MANGO CHUNKS *2 LB"):
    return {"producto": producto, "sku": None, "pallets": [{"values": values}]}


def test_bag_weight_field_match_is_case_insensitive():
    assert is_bag_weight_field("PESO BOLSA 3")
    assert is_bag_weight_field("peso_bolsa")
    assert not is_bag_weight_field("Peso Fruta")


def test_monoproducto_within_tolerance(run_rule):
    assert run_rule(QC_MONOPRODUCTO, _mono({"Peso Bolsa 1": "908", "Peso Bolsa 2": "905"})) == []


def test_monoproducto_flags_each_bad_bag(run_rule):
    flags = run_rule(QC_MONOPRODUCTO, _mono({"Peso Bolsa 1": "960", "Peso Bolsa 2": "850", "Peso Fruta": "1"}))
    assert sorted(f.key for f in flags) == ["pallets[0].Peso Bolsa 1", "pallets[0].Peso Bolsa 2"]


def test_monoproducto_without_declared_weight(run_rule):
    assert run_rule(QC_MONOPRODUCTO, _mono({"Peso Bolsa 1": "5000"}, producto="Mango")) == []
