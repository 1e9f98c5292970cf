from typing import Optional

from PySide6.QtCore import Signal, Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QFormLayout, QDoubleSpinBox, QCheckBox,
    QComboBox, QSlider, QLabel
)

from insolepreview.model.profiles import OrderOptions, ThicknessOption, WidthOption
from insolepreview.model.state import InsoleParameters


class ParametersControlPanel(QWidget):
    """
    Left-hand panel with the insole dimensions.

    The preset group maps coarse order options onto the spin boxes; the spin
    boxes are the single source of the emitted parameters.
    """
    parameters_changed = Signal(object)  # InsoleParameters

    def __init__(self, parameters: InsoleParameters, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._updating = False

        layout = QVBoxLayout(self)

        # --- Presets ---
        grp_preset = QGroupBox("Order preset")
        form_preset = QFormLayout(grp_preset)

        self.combo_width = QComboBox()
        self.combo_width.addItems([o.value for o in WidthOption])
        self.combo_width.setCurrentText(WidthOption.MEDIUM.value)

        self.combo_thickness = QComboBox()
        self.combo_thickness.addItems([o.value for o in ThicknessOption])

        self.slider_length = QSlider(Qt.Horizontal)
        self.slider_length.setRange(0, 100)
        self.slider_length.setValue(50)
        self.lbl_length = QLabel("50")

        form_preset.addRow("Width", self.combo_width)
        form_preset.addRow("Thickness", self.combo_thickness)
        form_preset.addRow("Length", self.slider_length)
        form_preset.addRow("", self.lbl_length)
        layout.addWidget(grp_preset)

        # --- Dimensions ---
        grp_dims = QGroupBox("Dimensions")
        form_dims = QFormLayout(grp_dims)

        self.sp_width = self._make_spin(parameters.width)
        self.sp_length = self._make_spin(parameters.length)
        self.sp_thickness = self._make_spin(parameters.thickness)
        self.chk_relief = QCheckBox("Detailed relief")
        self.chk_relief.setChecked(parameters.detailed_relief)

        form_dims.addRow("Width", self.sp_width)
        form_dims.addRow("Length", self.sp_length)
        form_dims.addRow("Thickness", self.sp_thickness)
        form_dims.addRow("", self.chk_relief)
        layout.addWidget(grp_dims)

        self.lbl_status = QLabel("")
        self.lbl_status.setWordWrap(True)
        self.lbl_status.setStyleSheet("color: #b00020;")
        layout.addWidget(self.lbl_status)
        layout.addStretch()

        # --- Signals ---
        self.combo_width.currentTextChanged.connect(self._on_preset_changed)
        self.combo_thickness.currentTextChanged.connect(self._on_preset_changed)
        self.slider_length.valueChanged.connect(self._on_preset_changed)
        for sp in (self.sp_width, self.sp_length, self.sp_thickness):
            sp.valueChanged.connect(self._emit_change)
        self.chk_relief.toggled.connect(self._emit_change)

    @staticmethod
    def _make_spin(value: float) -> QDoubleSpinBox:
        sp = QDoubleSpinBox()
        # Zero passes through; the pipeline reports it as an error
        sp.setRange(0.0, 100.0)
        sp.setDecimals(3)
        sp.setSingleStep(0.05)
        sp.setValue(value)
        return sp

    def parameters(self) -> InsoleParameters:
        return InsoleParameters(
            width=self.sp_width.value(),
            length=self.sp_length.value(),
            thickness=self.sp_thickness.value(),
            detailed_relief=self.chk_relief.isChecked(),
        )

    def set_error(self, message: str) -> None:
        self.lbl_status.setText(message)

    def set_parameters(self, parameters: InsoleParameters, options: OrderOptions = OrderOptions()) -> None:
        """Show `parameters` and the preset `options` without emitting a change."""
        self._updating = True
        try:
            self.combo_width.setCurrentText(WidthOption(options.width).value)
            self.combo_thickness.setCurrentText(ThicknessOption(options.thickness).value)
            self.slider_length.setValue(int(options.length_value))
            self.lbl_length.setText(str(self.slider_length.value()))
            self.sp_width.setValue(parameters.width)
            self.sp_length.setValue(parameters.length)
            self.sp_thickness.setValue(parameters.thickness)
            self.chk_relief.setChecked(parameters.detailed_relief)
        finally:
            self._updating = False

    def _on_preset_changed(self, *_) -> None:
        if self._updating:
            return
        options = OrderOptions(
            width=WidthOption(self.combo_width.currentText()),
            thickness=ThicknessOption(self.combo_thickness.currentText()),
            length_value=self.slider_length.value(),
            detailed_relief=self.chk_relief.isChecked(),
        )
        self.lbl_length.setText(str(self.slider_length.value()))
        params = options.to_parameters()

        # Batch the three spin box updates into one emitted change
        self._updating = True
        self.sp_width.setValue(params.width)
        self.sp_length.setValue(params.length)
        self.sp_thickness.setValue(params.thickness)
        self._updating = False
        self._emit_change()

    def _emit_change(self, *_) -> None:
        if self._updating:
            return
        self.parameters_changed.emit(self.parameters())
