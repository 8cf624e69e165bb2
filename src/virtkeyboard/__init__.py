# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Key handling stages
# chrome level:
# stage 0: rendering collaborator emits (KeyDescriptor, KeyPress) pairs
# keyboard level:
# stage 1: modifier keys toggle the modifier state machine
# stage 2: resolve key + modifiers into a control edit or a character (AltGr, Shift, case)
# stage 3: hungarian compose against the character before the caret
# editor level:
# stage 4: apply the edit to the attached text surface and consume one-shot modifiers
