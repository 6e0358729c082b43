INPUT_TOPIC = "headaim/input"
FRAMES_TOPIC = "headaim/frames"
# MQTT topics
