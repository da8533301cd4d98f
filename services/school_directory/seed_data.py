# Bundled seed data. Regenerate the SEED_SCHOOLS block with the admin
# "export" route and paste it over this one.

SEED_SCHOOLS = [
    {
        "id": "1",
        "name": "Genki Japanese and Culture School",
        "address": "1-2-3 Shinjuku, Shinjuku-ku, Tokyo",
        "city": "Tokyo",
        "phone": ["03-1234-5678"],
        "google_maps_url": "https://www.google.com/maps/embed?pb=!1m18!1m12!1m3!1d3240.3!2d139.7034!3d35.6938!2m3!1f0!2f0!3f0!3m2!1i1024!2i768!4f13.1",
        "lat": 35.6938,
        "lng": 139.7034,
        "schedule": ["Morning", "Afternoon"],
        "course_types": ["JLPT N5", "JLPT N4"],
        "custom_courses": [],
        "images": ["https://picsum.photos/seed/genki/800/600", "https://picsum.photos/seed/genki2/800/600"],
        "description": "A friendly and effective school located in the heart of Shinjuku. We focus on practical communication skills and cultural immersion.",
    },
    {
        "id": "2",
        "name": "KAI Japanese Language School",
        "address": "4-5-6 Shibuya, Shibuya-ku, Tokyo",
        "city": "Tokyo",
        "phone": ["03-9876-5432"],
        "google_maps_url": "https://www.google.com/maps/embed?pb=!1m18!1m12!1m3!1d3241.281829672288!2d139.6994513152582!3d35.65803408019688!2m3!1f0!2f0!3f0!3m2!1i1024!2i768!4f13.1",
        "lat": 35.6580,
        "lng": 139.7016,
        "schedule": ["Morning", "Afternoon", "Evening"],
        "course_types": ["JLPT N3", "JLPT N2", "JLPT N1"],
        "custom_courses": ["Tokutei Gaishoku"],
        "images": ["https://picsum.photos/seed/kai/800/600", "https://picsum.photos/seed/kai2/800/600"],
        "description": "Specializing in business Japanese and JLPT preparation, KAI offers a professional environment for serious learners in Shibuya.",
    },
    {
        "id": "3",
        "name": "JaLS Group - Kyoto Campus",
        "address": "7-8-9 Nakagyo-ku, Kyoto",
        "city": "Kyoto",
        "phone": ["075-111-2222"],
        "google_maps_url": "https://www.google.com/maps/embed?pb=!1m18!1m12!1m3!1d3268.641549429188!2d135.7658403152399!3d35.01163628036128!2m3!1f0!2f0!3f0!3m2!1i1024!2i768!4f13.1",
        "lat": 35.0116,
        "lng": 135.7681,
        "schedule": ["Morning", "Afternoon"],
        "course_types": ["JLPT N5"],
        "custom_courses": [],
        "images": ["https://picsum.photos/seed/jals/800/600"],
        "description": "Learn Japanese while experiencing the traditional culture of Kyoto. Our school offers many activities and a chance to make new friends.",
    },
    {
        "id": "4",
        "name": "Osaka YMCA International School",
        "address": "1-1-1 Naniwa-ku, Osaka",
        "city": "Osaka",
        "phone": ["06-3333-4444"],
        "google_maps_url": "https://www.google.com/maps/embed?pb=!1m18!1m12!1m3!1d3281.258682977717!2d135.504067315231!3d34.66544218044158!2m3!1f0!2f0!3f0!3m2!1i1024!2i768!4f13.1",
        "lat": 34.6655,
        "lng": 135.5040,
        "schedule": ["Full-day"],
        "course_types": ["JLPT N2"],
        "custom_courses": ["Tokutei Hotel"],
        "images": ["https://picsum.photos/seed/ymca/800/600"],
        "description": "A large, well-established school in Osaka providing comprehensive and intensive Japanese language programs for students aiming for higher education or employment.",
    },
    {
        "id": "5",
        "name": "NILS Fukuoka",
        "address": "2-2-2 Hakata-ku, Fukuoka",
        "city": "Fukuoka",
        "phone": ["092-555-6666"],
        "google_maps_url": "https://www.google.com/maps/embed?pb=!1m18!1m12!1m3!1d3323.896758368538!2d130.4184223152018!3d33.59035508073578!2m3!1f0!2f0!3f0!3m2!1i1024!2i768!4f13.1",
        "lat": 33.5904,
        "lng": 130.4206,
        "schedule": ["Morning", "Afternoon", "Evening"],
        "course_types": ["JLPT N4", "JLPT N3"],
        "custom_courses": ["Tokutei Kaigo"],
        "images": ["https://picsum.photos/seed/nils/800/600", "https://picsum.photos/seed/nils2/800/600"],
        "description": "Study Japanese in the vibrant and friendly city of Fukuoka. NILS offers a wide range of courses to suit all levels and goals.",
    },
]

SEED_USERS = [
    {
        "id": "1",
        "email": "adminsakura@gmail.com",
        "password": "Sakura123",
        "role": "admin",
        "username": "Admin Sakura",
        "avatar_url": "https://ui-avatars.com/api/?name=Admin+Sakura&background=BC002D&color=fff",
        "created_at": "2023-10-26T10:00:00Z",
    },
    {
        "id": "2",
        "email": "kenji.tanaka@example.com",
        "password": "password123",
        "role": "user",
        "username": "Kenji T.",
        "avatar_url": None,
        "created_at": "2023-10-25T11:30:00Z",
    },
    {
        "id": "3",
        "email": "yuki.sato@example.com",
        "password": "password123",
        "role": "user",
        "username": "Yuki Sato",
        "avatar_url": None,
        "created_at": "2023-10-24T15:20:00Z",
    },
]

SEED_REVIEWS = [
    {
        "id": "1",
        "school_id": "1",
        "user_id": "2",
        "user_name": "kenji.tanaka@example.com",
        "rating": 5,
        "comment": "Excellent teachers and a very friendly atmosphere. I learned so much in just 3 months!",
        "created_at": "2023-11-15T10:00:00Z",
    },
    {
        "id": "2",
        "school_id": "1",
        "user_id": "3",
        "user_name": "yuki.sato@example.com",
        "rating": 4,
        "comment": "Great location in Shinjuku. The classes are intense but effective.",
        "created_at": "2023-12-01T14:30:00Z",
    },
    {
        "id": "3",
        "school_id": "2",
        "user_id": "2",
        "user_name": "kenji.tanaka@example.com",
        "rating": 5,
        "comment": "Best school for business Japanese. Highly recommended.",
        "created_at": "2023-10-20T09:15:00Z",
    },
]
