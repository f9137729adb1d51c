import numpy as np
from qmodel.models import QsmSb
from qmodel.util import start_log

start_log(log_to_file=False, log_to_stdout=True, log_level="DEBUG")

model = QsmSb()
model.scale_protocols("user")  # what a user sees and edits
print(model.prot["Magnetization"].format)  # ['FieldStrength(T)', 'CentralFreq(MHz)']

model.set_option("Split-Bregman", True)
model.update_fields()  # L1/L2 regularizers forced on and locked
print(model.controls["L1 Regularized"].marker)

data = {"PhaseGRE": np.zeros((64, 64, 32)), "Mask": np.ones((64, 64, 32))}
assert model.sanity_check(data) is None

with model.protocols_in_original_units() as prot:  # what fitting code consumes
    print(prot["Magnetization"].mat)

path = model.save_obj("qsm_settings")  # -> qsm_settings.qmodel.msgpack
restored = QsmSb().load_obj(path)
assert restored == model
print(QsmSb.get_provenance())
