from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QComboBox, QPushButton, QFormLayout
from PySide6.QtCore import Signal, QObject

NONE_TEXT = "None"

SELECTION_ORDER = ["door_placement", "base_direction", "facing_direction", "floor", "unit_door_direction"]


class SelectionSignals(QObject):
    fieldEdited = Signal(str, object)  # field, value (None = 清空)
    undoRequest = Signal()
    resetRequest = Signal()


class SelectionPanel:
    def __init__(self):
        self.widget = QWidget()
        self.signals = SelectionSignals()
        layout = QVBoxLayout(self.widget)
        notice = QLabel("此工具僅為個人使用，勿將其用於商業行為。")
        notice.setStyleSheet("font-weight: bold;")
        layout.addWidget(notice)

        self.combos = {}
        self.form_labels = {}
        self.info_labels = {}
        form = QFormLayout()
        for name in SELECTION_ORDER:
            combo = QComboBox()
            combo.addItem(NONE_TEXT, None)
            label = QLabel(name)
            info = QLabel("")
            self.combos[name] = combo
            self.form_labels[name] = label
            self.info_labels[name] = info
            form.addRow(label, combo)
            form.addRow("", info)
            combo.currentIndexChanged.connect(lambda _idx, n=name: self._on_combo_change(n))
        layout.addLayout(form)

        self.transform_lbl = QLabel("")
        self.transform_lbl.setStyleSheet("font-weight: bold;")
        layout.addWidget(self.transform_lbl)
        self.relation_lbl = QLabel("")
        self.description_lbl = QLabel("")
        self.description_lbl.setWordWrap(True)
        layout.addWidget(self.relation_lbl)
        layout.addWidget(self.description_lbl)

        self.btn_undo = QPushButton("撤銷")
        self.btn_reset = QPushButton("重設")
        layout.addWidget(self.btn_undo)
        layout.addWidget(self.btn_reset)
        layout.addStretch()
        self.btn_undo.clicked.connect(lambda: self.signals.undoRequest.emit())
        self.btn_reset.clicked.connect(lambda: self.signals.resetRequest.emit())

    def load_choices(self, doc):
        """填充下拉选项（不触发信号）"""
        items = {
            "door_placement": [(m.value, m.value) for m in doc.door_placements()],
            "base_direction": [(d, d) for d in doc.directions()],
            "facing_direction": [(d, d) for d in doc.directions()],
            "floor": [(str(f), f) for f in doc.floors()],
            "unit_door_direction": [(d, d) for d in doc.directions()],
        }
        for name, entries in items.items():
            combo = self.combos[name]
            combo.blockSignals(True)
            combo.clear()
            combo.addItem(NONE_TEXT, None)
            for text, data in entries:
                combo.addItem(text, data)
            combo.blockSignals(False)

    def show_document(self, doc):
        """按当前状态刷新所有控件（不触发信号）"""
        labels = doc.labels()
        for name in SELECTION_ORDER:
            combo = self.combos[name]
            self.form_labels[name].setText(labels[name])
            combo.blockSignals(True)
            value = getattr(doc.state, name)
            value = getattr(value, "value", value)  # DoorPlacement -> 文本
            idx = combo.findData(value) if value is not None else 0
            combo.setCurrentIndex(max(idx, 0))
            disabled = set(doc.disabled(name))
            model = combo.model()
            for i in range(1, combo.count()):
                item = model.item(i)
                if item is not None:
                    item.setEnabled(combo.itemData(i) not in disabled)
            combo.blockSignals(False)

        self.info_labels["door_placement"].setText(doc.door_info())
        for name in ("base_direction", "facing_direction", "unit_door_direction"):
            self.info_labels[name].setText(doc.direction_info(name))
        self.info_labels["floor"].setText(doc.floor_info())
        self.transform_lbl.setText(doc.transform_info())

        relation, description, color = doc.relation_info()
        style = f"color: {color};" if color and color != "default" else ""
        self.relation_lbl.setText(relation)
        self.relation_lbl.setStyleSheet(style)
        self.description_lbl.setText(description)
        self.description_lbl.setStyleSheet(style)

    def _on_combo_change(self, name: str):
        combo = self.combos[name]
        self.signals.fieldEdited.emit(name, combo.currentData())
